"""
HTTP client for the items API.

Writes are checked locally with the same field rules the server applies, so
a form can report problems before any request is sent.
"""
from typing import Any, Mapping, Optional

import httpx

from app.config import get_settings
from app.core.item_rules import validate_field, validate_item


class ItemsApiError(Exception):
    """
    Raised for any failed items API call.

    Attributes:
        message: Top-level message from the server (or the local pre-check).
        status_code: HTTP status, or None when the request was never sent.
        errors: Field name -> message map, empty when the server sent none.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = dict(errors or {})


class ItemsClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        prefix: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        settings = get_settings()
        self.items_path = "{}/items".format(settings.API_PREFIX if prefix is None else prefix)
        self._client = httpx.Client(
            base_url=base_url or settings.CLIENT_BASE_URL,
            timeout=timeout if timeout is not None else settings.CLIENT_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ItemsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ItemsApiError("{}: {}".format(fallback, exc)) from exc
        if response.is_success:
            return response
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        raise ItemsApiError(
            body.get("message") or fallback,
            status_code=response.status_code,
            errors=body.get("errors"),
        )

    @staticmethod
    def _precheck(data: Mapping[str, Any], is_update: bool) -> None:
        errors = validate_item(data, is_update=is_update)
        if errors:
            raise ItemsApiError("Validation failed", errors=errors)

    def fetch_items(
        self,
        search: str = "",
        status: str = "",
        page: int = 1,
        page_size: int = 10,
        sort: str = "createdAt",
        order: str = "desc",
    ) -> dict:
        params = {
            "search": search,
            "status": status,
            "page": str(page),
            "pageSize": str(page_size),
            "sort": sort,
            "order": order,
        }
        return self._request("GET", self.items_path, "Failed to fetch items", params=params).json()

    def fetch_item(self, item_id: str) -> dict:
        path = "{}/{}".format(self.items_path, item_id)
        return self._request("GET", path, "Failed to fetch item").json()

    def create_item(self, data: Mapping[str, Any]) -> dict:
        self._precheck(data, is_update=False)
        return self._request("POST", self.items_path, "Failed to create item", json=dict(data)).json()

    def update_item(self, item_id: str, data: Mapping[str, Any]) -> dict:
        self._precheck(data, is_update=True)
        path = "{}/{}".format(self.items_path, item_id)
        return self._request("PUT", path, "Failed to update item", json=dict(data)).json()

    def delete_item(self, item_id: str) -> None:
        path = "{}/{}".format(self.items_path, item_id)
        self._request("DELETE", path, "Failed to delete item")


__all__ = ["ItemsApiError", "ItemsClient", "validate_field"]
