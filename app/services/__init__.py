from app.services.item_store import DuplicateSkuError, ItemStore

__all__ = ["DuplicateSkuError", "ItemStore"]
