import unittest

from sqlalchemy.orm import sessionmaker

from app.core.item_rules import coerce_item
from app.core.list_query import ItemFilter
from app.database import build_engine, create_tables, session_scope
from app.models.item import InventoryItem
from app.services.item_store import ItemStore
from scripts.check_connection import describe_database
from scripts.seed_data import SAMPLE_ITEMS, seed


class SeedDataTest(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite:///:memory:")
        create_tables(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.db = self.Session()

    def tearDown(self):
        self.db.close()

    def test_seed_inserts_samples_once(self):
        self.assertEqual(seed(self.db), len(SAMPLE_ITEMS))
        self.assertEqual(seed(self.db), 0)
        store = ItemStore(self.db)
        self.assertEqual(store.count(ItemFilter()), 3)
        self.assertEqual(store.count(ItemFilter(status="inactive")), 1)
        self.assertEqual(store.find_by_sku("SKU-0002").unit_price, 9.99)
        self.assertIsNone(store.find_by_sku("SKU-0002").note)

    def test_reset_reseeds(self):
        seed(self.db)
        self.assertEqual(seed(self.db, reset=True), len(SAMPLE_ITEMS))
        self.assertEqual(ItemStore(self.db).count(ItemFilter()), 3)

    def test_session_scope_rolls_back_on_error(self):
        with self.assertRaises(RuntimeError):
            with session_scope(self.Session) as db:
                db.add(InventoryItem(**coerce_item(SAMPLE_ITEMS[0])))
                db.flush()
                raise RuntimeError("abort")
        self.assertEqual(ItemStore(self.db).count(ItemFilter()), 0)

    def test_describe_database_reports_item_count(self):
        seed(self.db)
        info = describe_database(self.engine)
        self.assertEqual(info["backend"], "sqlite")
        self.assertTrue(info["has_items_table"])
        self.assertEqual(info["item_count"], 3)


if __name__ == "__main__":
    unittest.main()
