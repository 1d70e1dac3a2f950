ITEM_STATUSES = ("active", "inactive")

# Public (wire) field name -> column attribute on InventoryItem.
SORTABLE_FIELDS = {
    "sku": "sku",
    "name": "name",
    "category": "category",
    "quantity": "quantity",
    "unitPrice": "unit_price",
    "status": "status",
    "updatedAt": "updated_at",
    "createdAt": "created_at",
}

DEFAULT_SORT_FIELD = "createdAt"
FALLBACK_SORT_FIELD = "updatedAt"
DEFAULT_SORT_ORDER = "desc"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SKU_MIN_LENGTH = 3
SKU_MAX_LENGTH = 50
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 100
SUPPLIER_MAX_LENGTH = 200
NOTE_MAX_LENGTH = 500
PRICE_MAX_DECIMALS = 2
# Largest value a signed 64-bit INTEGER column holds.
QUANTITY_MAX = 2**63 - 1

MUTABLE_FIELDS = (
    "sku",
    "name",
    "category",
    "quantity",
    "unitPrice",
    "supplier",
    "status",
    "note",
)
