from app.clients.items_client import ItemsApiError, ItemsClient

__all__ = ["ItemsApiError", "ItemsClient"]
