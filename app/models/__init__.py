from app.models.item import InventoryItem

__all__ = ["InventoryItem"]
