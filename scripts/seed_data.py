import argparse
import logging
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy import delete, select

from app.core.item_rules import coerce_item, validate_item
from app.core.logging import setup_logging
from app.database import create_tables, session_scope
from app.models.item import InventoryItem
from app.services.item_store import ItemStore

logger = logging.getLogger(__name__)

SAMPLE_ITEMS = [
    {
        "sku": "SKU-0001",
        "name": "USB Keyboard",
        "category": "Accessories",
        "quantity": 25,
        "unitPrice": 12.50,
        "supplier": "Tech Supplier A",
        "status": "active",
        "note": "Basic model",
    },
    {
        "sku": "SKU-0002",
        "name": "Wireless Mouse",
        "category": "Accessories",
        "quantity": 40,
        "unitPrice": 9.99,
        "supplier": "Tech Supplier B",
        "status": "active",
        "note": None,
    },
    {
        "sku": "SKU-0003",
        "name": "27-inch Monitor",
        "category": "Display",
        "quantity": 10,
        "unitPrice": 149.00,
        "supplier": "Tech Supplier A",
        "status": "inactive",
        "note": "Discontinued",
    },
]


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample inventory items.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete existing items before seeding.",
    )
    return parser.parse_args()


def seed(db, reset: bool = False) -> int:
    if reset:
        db.execute(delete(InventoryItem))
        db.commit()
        logger.info("Cleared existing inventory items")

    if db.execute(select(InventoryItem.id).limit(1)).first():
        return 0

    store = ItemStore(db)
    for sample in SAMPLE_ITEMS:
        errors = validate_item(sample)
        if errors:
            raise ValueError("Invalid sample {}: {}".format(sample["sku"], errors))
        item = store.insert(coerce_item(sample))
        logger.info("Inserted %s: %s", item.sku, item.name)
    return len(SAMPLE_ITEMS)


def main():
    setup_logging()
    args = parse_args()
    create_tables()

    with session_scope() as db:
        inserted = seed(db, reset=args.reset)

    if inserted:
        print("Seed completed: {} items inserted.".format(inserted))
    else:
        print("Seed skipped: items already exist.")


if __name__ == "__main__":
    main()
