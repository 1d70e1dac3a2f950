import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from app.core.outcomes import OutcomeKind
from app.database import build_engine, create_tables
from app.services import item_service
from app.services.item_store import ItemStore


def make_session():
    engine = build_engine("sqlite:///:memory:")
    create_tables(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()


def payload(**overrides):
    data = {
        "sku": "SKU-1",
        "name": "Widget",
        "category": "Tools",
        "quantity": "5",
        "unitPrice": "9.99",
        "supplier": "Acme",
        "status": "active",
        "note": "",
    }
    data.update(overrides)
    return data


class ItemServiceTest(unittest.TestCase):
    def setUp(self):
        self.db = make_session()

    def tearDown(self):
        self.db.close()

    def _create(self, **overrides):
        outcome = item_service.create_item(self.db, payload(**overrides))
        self.assertEqual(outcome.kind, OutcomeKind.CREATED, outcome.errors)
        return outcome.value

    def test_create_coerces_and_normalizes(self):
        item = self._create()
        self.assertEqual(item.quantity, 5)
        self.assertEqual(item.unit_price, 9.99)
        self.assertIsNone(item.note)
        self.assertTrue(item.id)
        self.assertIsNotNone(item.created_at)
        self.assertIsNotNone(item.updated_at)

    def test_create_then_get_round_trip(self):
        created = self._create()
        fetched = item_service.get_item(self.db, created.id)
        self.assertEqual(fetched.kind, OutcomeKind.OK)
        self.assertEqual(fetched.value.to_payload(), created.to_payload())

    def test_create_validation_reports_all_fields(self):
        outcome = item_service.create_item(self.db, payload(sku="", name=""))
        self.assertEqual(outcome.kind, OutcomeKind.VALIDATION)
        self.assertEqual(outcome.message, "Validation failed")
        self.assertEqual(set(outcome.errors), {"sku", "name"})

    def test_create_duplicate_sku_conflicts(self):
        self._create(sku="SKU-0001")
        outcome = item_service.create_item(self.db, payload(sku="SKU-0001", name="Another"))
        self.assertEqual(outcome.kind, OutcomeKind.CONFLICT)
        self.assertEqual(outcome.message, "Duplicate SKU")
        self.assertEqual(outcome.errors, {"sku": "This SKU already exists"})

    def test_create_race_on_constraint_is_a_conflict(self):
        self._create(sku="SKU-0001")
        # The pre-check misses the other writer; the unique index still catches it.
        with patch.object(ItemStore, "find_by_sku", return_value=None):
            outcome = item_service.create_item(self.db, payload(sku="SKU-0001"))
        self.assertEqual(outcome.kind, OutcomeKind.CONFLICT)
        self.assertEqual(outcome.errors, {"sku": "This SKU already exists"})
        listed = item_service.list_items(self.db, {})
        self.assertEqual(listed.value.meta.total, 1)

    def test_get_missing_or_malformed_id_is_not_found(self):
        for item_id in ("abc", "999", "", "-4"):
            outcome = item_service.get_item(self.db, item_id)
            self.assertEqual(outcome.kind, OutcomeKind.NOT_FOUND, item_id)
            self.assertEqual(outcome.message, "Item not found")

    def test_update_replaces_every_mutable_field(self):
        created = self._create()
        outcome = item_service.update_item(
            self.db,
            created.id,
            {"sku": "SKU-2", "name": "Gadget", "quantity": 0, "unitPrice": "0.5", "status": "inactive"},
        )
        self.assertEqual(outcome.kind, OutcomeKind.OK)
        updated = outcome.value
        self.assertEqual(updated.id, created.id)
        self.assertEqual(updated.sku, "SKU-2")
        self.assertEqual(updated.status, "inactive")
        self.assertEqual(updated.unit_price, 0.5)
        self.assertIsNone(updated.category)
        self.assertIsNone(updated.supplier)
        self.assertEqual(updated.created_at, created.created_at)
        self.assertGreaterEqual(updated.updated_at, created.updated_at)

    def test_update_keeps_own_sku(self):
        created = self._create(sku="SKU-0001")
        outcome = item_service.update_item(self.db, created.id, payload(sku="SKU-0001", quantity=3))
        self.assertEqual(outcome.kind, OutcomeKind.OK)
        self.assertEqual(outcome.value.quantity, 3)

    def test_update_to_other_items_sku_conflicts(self):
        self._create(sku="SKU-0001")
        second = self._create(sku="SKU-0002")
        outcome = item_service.update_item(self.db, second.id, payload(sku="SKU-0001"))
        self.assertEqual(outcome.kind, OutcomeKind.CONFLICT)

    def test_update_race_on_constraint_is_a_conflict(self):
        self._create(sku="SKU-0001")
        second = self._create(sku="SKU-0002")
        with patch.object(ItemStore, "find_by_sku", return_value=None):
            outcome = item_service.update_item(self.db, second.id, payload(sku="SKU-0001"))
        self.assertEqual(outcome.kind, OutcomeKind.CONFLICT)

    def test_update_checks_existence_before_validation(self):
        self.assertEqual(item_service.update_item(self.db, "999", {}).kind, OutcomeKind.NOT_FOUND)
        self.assertEqual(item_service.update_item(self.db, "bad-id", {}).kind, OutcomeKind.NOT_FOUND)
        created = self._create()
        outcome = item_service.update_item(self.db, created.id, payload(quantity="-1"))
        self.assertEqual(outcome.kind, OutcomeKind.VALIDATION)
        self.assertEqual(outcome.errors, {"quantity": "Quantity must be >= 0"})

    def test_delete_twice_is_not_found_the_second_time(self):
        created = self._create()
        self.assertEqual(item_service.delete_item(self.db, created.id).kind, OutcomeKind.DELETED)
        self.assertEqual(item_service.delete_item(self.db, created.id).kind, OutcomeKind.NOT_FOUND)
        self.assertEqual(item_service.delete_item(self.db, created.id).kind, OutcomeKind.NOT_FOUND)
        self.assertEqual(item_service.delete_item(self.db, "zzz").kind, OutcomeKind.NOT_FOUND)

    def test_list_filters_by_status_and_reports_total(self):
        self._create(sku="SKU-A", status="active")
        self._create(sku="SKU-B", status="inactive")
        outcome = item_service.list_items(self.db, {"status": "inactive", "page": "1", "pageSize": "10"})
        self.assertEqual(outcome.kind, OutcomeKind.OK)
        body = outcome.value.to_payload()
        self.assertEqual(body["meta"], {"page": 1, "pageSize": 10, "total": 1})
        self.assertEqual([item["sku"] for item in body["data"]], ["SKU-B"])

    def test_list_total_ignores_paging(self):
        for index in range(5):
            self._create(sku="SKU-{}".format(index), quantity=index)
        outcome = item_service.list_items(self.db, {"pageSize": "2", "page": "3", "sort": "quantity", "order": "asc"})
        body = outcome.value.to_payload()
        self.assertEqual(body["meta"], {"page": 3, "pageSize": 2, "total": 5})
        self.assertEqual([item["sku"] for item in body["data"]], ["SKU-4"])

    def test_store_fault_is_an_internal_outcome(self):
        fault = OperationalError("SELECT 1", {}, Exception("database is locked"))
        with patch.object(ItemStore, "count", side_effect=fault):
            with self.assertLogs("app.services.item_service", level="ERROR"):
                outcome = item_service.list_items(self.db, {})
        self.assertEqual(outcome.kind, OutcomeKind.INTERNAL)
        self.assertEqual(outcome.message, "Internal server error")
        self.assertEqual(item_service.list_items(self.db, {}).kind, OutcomeKind.OK)


if __name__ == "__main__":
    unittest.main()
