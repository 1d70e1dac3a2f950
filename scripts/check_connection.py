import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.logging import setup_logging
from app.database import engine
from app.models.item import InventoryItem


def describe_database(bind) -> dict:
    with bind.connect() as conn:
        tables = inspect(conn).get_table_names()
        has_items = InventoryItem.__tablename__ in tables
        count = None
        if has_items:
            count = conn.execute(select(func.count(InventoryItem.id))).scalar_one()
    return {
        "backend": bind.url.get_backend_name(),
        "database": bind.url.database,
        "tables": tables,
        "has_items_table": has_items,
        "item_count": count,
    }


def main() -> int:
    setup_logging()
    print("Testing database connection...\n")
    try:
        info = describe_database(engine)
    except SQLAlchemyError as exc:
        print("Connection FAILED: {}".format(exc))
        return 1

    print("Backend: {}".format(info["backend"]))
    print("Database: {}".format(info["database"]))
    print("Tables: {}".format(", ".join(info["tables"]) or "(none)"))
    if info["has_items_table"]:
        print("Total items: {}".format(info["item_count"]))
    else:
        print('Table "{}" not found - run scripts/seed_data.py'.format(InventoryItem.__tablename__))
    print("\n--- Connection test PASSED ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
