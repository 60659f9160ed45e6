"""Tests for purchase summary persistence."""

from datetime import date, datetime, timedelta, timezone

from smarteat.schemas import PurchaseItem, PurchaseSummary
from smarteat.shopping.storage import InMemoryKeyValueStore, PurchaseSummaryRepository


class TestInMemoryKeyValueStore:
    """Tests for the dictionary-backed store."""

    def test_set_get_delete(self):
        store = InMemoryKeyValueStore()
        store.set("a", "1")

        assert store.get("a") == "1"
        store.delete("a")
        assert store.get("a") is None

    def test_delete_missing_is_noop(self):
        InMemoryKeyValueStore().delete("nothing")

    def test_keys_by_prefix(self):
        store = InMemoryKeyValueStore()
        store.set("x:1", "a")
        store.set("x:2", "b")
        store.set("y:1", "c")

        assert sorted(store.keys("x:")) == ["x:1", "x:2"]


class TestPurchaseSummaryRepository:
    """Tests for summary storage."""

    def test_save_and_get(self, repository):
        summary = PurchaseSummary(
            grocery_list_id="list-1",
            items=[
                PurchaseItem(
                    name="Milk",
                    source="grocery_list",
                    expiration_date=date(2025, 1, 20),
                    price=1.99,
                )
            ],
        )
        repository.save(summary)

        loaded = repository.get(summary.id)

        assert loaded.model_dump() == summary.model_dump()
        assert loaded is not summary

    def test_keys_are_prefixed(self):
        store = InMemoryKeyValueStore()
        repository = PurchaseSummaryRepository(store)
        summary = PurchaseSummary(grocery_list_id="list-1")

        repository.save(summary)

        assert list(store.keys()) == [f"smarteat:post_shopping:{summary.id}"]

    def test_get_unknown(self, repository):
        assert repository.get("missing") is None

    def test_delete(self, repository):
        summary = PurchaseSummary(grocery_list_id="list-1")
        repository.save(summary)

        repository.delete(summary.id)

        assert repository.get(summary.id) is None

    def test_list_all_newest_first(self):
        store = InMemoryKeyValueStore()
        repository = PurchaseSummaryRepository(store)
        store.set("unrelated", "not json")

        now = datetime(2025, 1, 10, tzinfo=timezone.utc)
        older = PurchaseSummary(grocery_list_id="a", shopping_date=now - timedelta(days=3))
        newer = PurchaseSummary(grocery_list_id="b", shopping_date=now)
        repository.save(older)
        repository.save(newer)

        assert [s.id for s in repository.list_all()] == [newer.id, older.id]
