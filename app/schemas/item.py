from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ItemRead(BaseModel):
    id: str
    sku: str
    name: str
    category: Optional[str] = None
    quantity: int
    unit_price: float = Field(serialization_alias="unitPrice")
    supplier: Optional[str] = None
    status: str
    note: Optional[str] = None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @classmethod
    def from_record(cls, record) -> "ItemRead":
        return cls(
            id=str(record.id),
            sku=record.sku,
            name=record.name,
            category=record.category,
            quantity=record.quantity,
            unit_price=record.unit_price,
            supplier=record.supplier,
            status=record.status,
            note=record.note,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        # SQLite drops tzinfo; stored values are always UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class ItemListMeta(BaseModel):
    page: int
    page_size: int = Field(serialization_alias="pageSize")
    total: int

    model_config = ConfigDict(populate_by_name=True)


class ItemList(BaseModel):
    data: List[ItemRead] = Field(default_factory=list)
    meta: ItemListMeta

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class ErrorBody(BaseModel):
    message: str
    errors: Optional[dict[str, str]] = None


class HealthStatus(BaseModel):
    status: str
    timestamp: str
    app: str


__all__ = ["ErrorBody", "HealthStatus", "ItemList", "ItemListMeta", "ItemRead"]
