from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String

from app.database.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True)

    sku = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    category = Column(String(100))

    quantity = Column(Integer, nullable=False, default=0)
    unit_price = Column(Float, nullable=False, default=0)

    supplier = Column(String(200))
    status = Column(String(16), nullable=False, default="active")
    note = Column(String(500))

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity"),
        CheckConstraint("unit_price >= 0", name="ck_inventory_items_unit_price"),
        CheckConstraint("status IN ('active', 'inactive')", name="ck_inventory_items_status"),
    )


__all__ = ["InventoryItem"]
