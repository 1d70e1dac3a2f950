from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.outcomes import INVALID_BODY_MESSAGE, Outcome, OutcomeKind
from app.dependencies import get_db
from app.schemas.item import ErrorBody
from app.services import item_service

router = APIRouter(prefix="/items", tags=["Items"])

_STATUS_BY_KIND = {
    OutcomeKind.OK: status.HTTP_200_OK,
    OutcomeKind.CREATED: status.HTTP_201_CREATED,
    OutcomeKind.DELETED: status.HTTP_204_NO_CONTENT,
    OutcomeKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    OutcomeKind.CONFLICT: status.HTTP_409_CONFLICT,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorBody, "description": "Validation failed or invalid body"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorBody, "description": "Item not found"},
    status.HTTP_409_CONFLICT: {"model": ErrorBody, "description": "Duplicate SKU"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorBody, "description": "Internal server error"},
}


def _error_responses(*codes: int) -> dict:
    return {code: _ERROR_RESPONSES[code] for code in codes}


def render_outcome(outcome: Outcome) -> Response:
    status_code = _STATUS_BY_KIND[outcome.kind]
    if outcome.kind == OutcomeKind.DELETED:
        return Response(status_code=status_code)
    if outcome.ok:
        return JSONResponse(outcome.value.to_payload(), status_code=status_code)
    body = ErrorBody(message=outcome.message, errors=outcome.errors or None)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code)


def _invalid_body() -> Response:
    body = ErrorBody(message=INVALID_BODY_MESSAGE)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status.HTTP_400_BAD_REQUEST)


@router.get("", responses=_error_responses(500))
def list_items(
    search=Query(None, description="Case-insensitive text matched against sku, name, category, supplier"),
    item_status=Query(None, alias="status", description="active | inactive"),
    page=Query(None, description="1-based page number"),
    page_size=Query(None, alias="pageSize", description="Items per page, 1-100"),
    sort=Query(None, description="sku | name | category | quantity | unitPrice | status | updatedAt | createdAt"),
    order=Query(None, description="asc | desc"),
    db: Session = Depends(get_db),
):
    params = {
        "search": search,
        "status": item_status,
        "page": page,
        "pageSize": page_size,
        "sort": sort,
        "order": order,
    }
    return render_outcome(item_service.list_items(db, params))


@router.get("/{item_id}", responses=_error_responses(404, 500))
def get_item(item_id: str, db: Session = Depends(get_db)):
    return render_outcome(item_service.get_item(db, item_id))


@router.post("", status_code=status.HTTP_201_CREATED, responses=_error_responses(400, 409, 500))
def create_item(payload: Any = Body(None), db: Session = Depends(get_db)):
    if not isinstance(payload, dict):
        return _invalid_body()
    return render_outcome(item_service.create_item(db, payload))


@router.put("/{item_id}", responses=_error_responses(400, 404, 409, 500))
def update_item(item_id: str, payload: Any = Body(None), db: Session = Depends(get_db)):
    if not isinstance(payload, dict):
        return _invalid_body()
    return render_outcome(item_service.update_item(db, item_id, payload))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_error_responses(404, 500))
def delete_item(item_id: str, db: Session = Depends(get_db)):
    return render_outcome(item_service.delete_item(db, item_id))


__all__ = ["render_outcome", "router"]
