"""
Item operations: list, get, create, update, delete.

Every function returns an ``Outcome``. Database faults are logged, the
session is rolled back and the caller gets an internal outcome.
"""
import logging
from functools import wraps
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.item_rules import coerce_item, validate_item
from app.core.list_query import plan_list_query
from app.core.outcomes import Outcome
from app.schemas.item import ItemList, ItemListMeta, ItemRead
from app.services.item_store import DuplicateSkuError, ItemStore

logger = logging.getLogger(__name__)


def _store_guard(operation):
    @wraps(operation)
    def wrapper(db: Session, *args, **kwargs) -> Outcome:
        try:
            return operation(db, *args, **kwargs)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Store failure during %s", operation.__name__)
            return Outcome.internal()

    return wrapper


@_store_guard
def list_items(db: Session, params: Mapping[str, Any]) -> Outcome:
    query = plan_list_query(params)
    store = ItemStore(db)
    total = store.count(query.filter)
    records = store.find(
        query.filter,
        query.sort_column,
        query.descending,
        query.offset,
        query.limit,
    )
    return Outcome.success(
        ItemList(
            data=[ItemRead.from_record(record) for record in records],
            meta=ItemListMeta(page=query.page, page_size=query.page_size, total=total),
        )
    )


@_store_guard
def get_item(db: Session, item_id: Any) -> Outcome:
    record = ItemStore(db).find_by_id(item_id)
    if record is None:
        return Outcome.not_found()
    return Outcome.success(ItemRead.from_record(record))


@_store_guard
def create_item(db: Session, payload: Mapping[str, Any]) -> Outcome:
    errors = validate_item(payload)
    if errors:
        return Outcome.invalid(errors)

    fields = coerce_item(payload)
    store = ItemStore(db)
    if store.find_by_sku(fields["sku"]) is not None:
        logger.info("Rejected duplicate sku on create", extra={"sku": fields["sku"]})
        return Outcome.conflict()

    try:
        record = store.insert(fields)
    except DuplicateSkuError:
        logger.warning("Concurrent create hit sku constraint", extra={"sku": fields["sku"]})
        return Outcome.conflict()

    logger.info("Created item %s", record.id, extra={"item_id": record.id, "sku": record.sku})
    return Outcome.created(ItemRead.from_record(record))


@_store_guard
def update_item(db: Session, item_id: Any, payload: Mapping[str, Any]) -> Outcome:
    store = ItemStore(db)
    current = store.find_by_id(item_id)
    if current is None:
        return Outcome.not_found()

    errors = validate_item(payload, is_update=True)
    if errors:
        return Outcome.invalid(errors)

    fields = coerce_item(payload)
    if store.find_by_sku(fields["sku"], exclude_id=current.id) is not None:
        logger.info("Rejected duplicate sku on update", extra={"item_id": current.id, "sku": fields["sku"]})
        return Outcome.conflict()

    try:
        record = store.update_by_id(current.id, fields)
    except DuplicateSkuError:
        logger.warning(
            "Concurrent update hit sku constraint",
            extra={"item_id": current.id, "sku": fields["sku"]},
        )
        return Outcome.conflict()
    if record is None:
        return Outcome.not_found()

    logger.info("Updated item %s", record.id, extra={"item_id": record.id})
    return Outcome.success(ItemRead.from_record(record))


@_store_guard
def delete_item(db: Session, item_id: Any) -> Outcome:
    if not ItemStore(db).delete_by_id(item_id):
        return Outcome.not_found()
    logger.info("Deleted item %s", item_id, extra={"item_id": item_id})
    return Outcome.deleted()


__all__ = ["create_item", "delete_item", "get_item", "list_items", "update_item"]
