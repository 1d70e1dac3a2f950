"""
SQLAlchemy-backed record store for inventory items.

Each method is a single bounded round trip against the session. Unique
``sku`` violations surface as ``DuplicateSkuError``; every other database
error propagates unchanged.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.list_query import SEARCH_FIELDS, ItemFilter
from app.models.item import InventoryItem


_LIKE_ESCAPE = "\\"
_MAX_ITEM_ID = 2**63 - 1


class DuplicateSkuError(Exception):
    def __init__(self, sku: Optional[str] = None):
        super().__init__("sku already exists: {}".format(sku))
        self.sku = sku


def parse_item_id(value: Any) -> Optional[int]:
    """Return a positive integer id, or None when ``value`` is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        item_id = value
    else:
        text = str(value).strip() if value is not None else ""
        if not text.isdigit() or not text.isascii():
            return None
        item_id = int(text)
    return item_id if 0 < item_id <= _MAX_ITEM_ID else None


def _like_pattern(text: str) -> str:
    escaped = (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return "%{}%".format(escaped)


def filter_clauses(item_filter: ItemFilter) -> list:
    clauses = []
    if item_filter.status:
        clauses.append(InventoryItem.status == item_filter.status)
    if item_filter.search:
        pattern = _like_pattern(item_filter.search)
        clauses.append(
            or_(
                *(
                    getattr(InventoryItem, name).ilike(pattern, escape=_LIKE_ESCAPE)
                    for name in SEARCH_FIELDS
                )
            )
        )
    return clauses


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message


class ItemStore:
    def __init__(self, db: Session):
        self.db = db

    def count(self, item_filter: ItemFilter) -> int:
        stmt = select(func.count(InventoryItem.id)).where(*filter_clauses(item_filter))
        return int(self.db.execute(stmt).scalar_one())

    def find(
        self,
        item_filter: ItemFilter,
        sort_column: str,
        descending: bool,
        offset: int,
        limit: int,
    ) -> list[InventoryItem]:
        column = getattr(InventoryItem, sort_column)
        if descending:
            ordering = (column.desc(), InventoryItem.id.desc())
        else:
            ordering = (column.asc(), InventoryItem.id.asc())
        stmt = (
            select(InventoryItem)
            .where(*filter_clauses(item_filter))
            .order_by(*ordering)
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_by_sku(self, sku: str, exclude_id: Optional[int] = None) -> Optional[InventoryItem]:
        stmt = select(InventoryItem).where(InventoryItem.sku == sku)
        if exclude_id is not None:
            stmt = stmt.where(InventoryItem.id != exclude_id)
        return self.db.execute(stmt.limit(1)).scalars().first()

    def find_by_id(self, item_id: Any) -> Optional[InventoryItem]:
        parsed = parse_item_id(item_id)
        if parsed is None:
            return None
        return self.db.get(InventoryItem, parsed)

    def insert(self, fields: dict[str, Any]) -> InventoryItem:
        now = datetime.now(timezone.utc)
        item = InventoryItem(**fields, created_at=now, updated_at=now)
        self.db.add(item)
        self._commit(fields.get("sku"))
        self.db.refresh(item)
        return item

    def update_by_id(self, item_id: Any, fields: dict[str, Any]) -> Optional[InventoryItem]:
        item = self.find_by_id(item_id)
        if item is None:
            return None
        for key, value in fields.items():
            setattr(item, key, value)
        item.updated_at = datetime.now(timezone.utc)
        self._commit(fields.get("sku"))
        self.db.refresh(item)
        return item

    def delete_by_id(self, item_id: Any) -> bool:
        item = self.find_by_id(item_id)
        if item is None:
            return False
        self.db.delete(item)
        self.db.commit()
        return True

    def _commit(self, sku: Optional[str]) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if _is_unique_violation(exc):
                raise DuplicateSkuError(sku) from exc
            raise


__all__ = ["DuplicateSkuError", "ItemStore", "filter_clauses", "parse_item_id"]
