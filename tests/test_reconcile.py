"""Tests for purchase reconciliation and efficiency."""

from datetime import date

import pytest

from smarteat.schemas import PurchaseItem
from smarteat.shopping.reconcile import calculate_efficiency, reconcile, summarize_counts


def expected_item(name, quantity=1, unit="piece", category="dairy", **kwargs):
    return PurchaseItem(
        name=name, quantity=quantity, unit=unit, category=category, source="grocery_list", **kwargs
    )


def observed_item(name, quantity=1, unit="piece", category="dairy", **kwargs):
    kwargs.setdefault("status", "confirmed")
    return PurchaseItem(
        name=name, quantity=quantity, unit=unit, category=category, source="scanned", **kwargs
    )


class TestReconcile:
    """Tests for aligning expected and observed purchases."""

    def test_quantity_conflict(self):
        """A quantity mismatch is reported and the observed status wins."""
        milk = expected_item("Milk", quantity=2, unit="liters")
        scanned = observed_item("Milk", quantity=1, unit="liters", confidence=0.9)

        result = reconcile([milk], [scanned])

        assert len(result.conflicts) == 1
        conflict = result.conflicts[0]
        assert conflict.item_name == "Milk"
        assert conflict.expected_quantity == 2
        assert conflict.actual_quantity == 1

        merged = result.reconciled_items[0]
        assert merged.id == milk.id
        assert merged.status == "confirmed"
        assert merged.confidence == 0.9
        assert merged.source == "grocery_list"

    def test_unit_conflict(self):
        result = reconcile([expected_item("Milk", unit="liters")], [observed_item("Milk")])
        assert result.conflicts[0].expected_unit == "liters"
        assert result.conflicts[0].actual_unit == "piece"

    def test_missing_item(self):
        """Unobserved expected items are forced to not_purchased."""
        bread = expected_item("Bread", category="pantry")

        result = reconcile([bread], [])

        assert result.missing_items == ["Bread"]
        assert result.reconciled_items[0].status == "not_purchased"
        assert bread.status == "pending"

    def test_additional_item(self):
        apple = observed_item("Apple", category="fruits")

        result = reconcile([], [apple])

        assert result.additional_items == ["Apple"]
        assert result.reconciled_items == [apple]
        assert result.matched_count == 0

    def test_match_is_case_insensitive_but_category_sensitive(self):
        expected = [expected_item("milk", category="dairy")]

        same = reconcile(expected, [observed_item("MILK", category="dairy")])
        other = reconcile(expected, [observed_item("Milk", category="beverages")])

        assert same.missing_items == []
        assert other.missing_items == ["milk"]
        assert other.additional_items == ["Milk"]

    def test_observed_fields_carried_over(self):
        best_before = date(2025, 2, 1)
        result = reconcile(
            [expected_item("Yogurt")],
            [observed_item("Yogurt", expiration_date=best_before, image_uri="file://y.jpg")],
        )

        merged = result.reconciled_items[0]
        assert merged.expiration_date == best_before
        assert merged.image_uri == "file://y.jpg"

    def test_each_observation_used_once(self):
        """Duplicate expected items need duplicate observations."""
        expected = [expected_item("Egg"), expected_item("Egg")]

        result = reconcile(expected, [observed_item("Egg")])

        assert [item.status for item in result.reconciled_items] == [
            "confirmed",
            "not_purchased",
        ]

    def test_totality(self):
        """Every expected item appears once; leftovers are appended."""
        expected = [expected_item("Milk"), expected_item("Bread", category="pantry")]
        observed = [
            observed_item("Apple", category="fruits"),
            observed_item("Milk"),
            observed_item("Soda", category="beverages"),
        ]

        result = reconcile(expected, observed)

        assert len(result.reconciled_items) == len(expected) + 2
        assert [item.id for item in result.reconciled_items[:2]] == [e.id for e in expected]
        assert result.additional_items == ["Apple", "Soda"]
        assert result.matched_count == 1

    def test_idempotent_for_settled_items(self):
        """Reconciling the result again changes no statuses."""
        expected = [expected_item("Milk"), expected_item("Bread", category="pantry")]
        observed = [observed_item("Milk")]

        first = reconcile(expected, observed)
        second = reconcile(first.reconciled_items, observed)

        assert [i.status for i in second.reconciled_items[:2]] == [
            i.status for i in first.reconciled_items
        ]

    def test_output_reconciles_with_itself(self):
        """Reconciling an output against itself raises no new conflicts."""
        expected = [
            expected_item("Milk", quantity=2, unit="liters"),
            expected_item("Milk", quantity=3, unit="liters"),
            expected_item("Bread", category="pantry"),
        ]
        observed = [
            observed_item("milk", quantity=1, unit="liters"),
            observed_item("Soda", category="beverages"),
        ]
        out = reconcile(expected, observed)
        assert len(out.conflicts) == 1

        again = reconcile(out.reconciled_items, out.reconciled_items)

        assert again.conflicts == []
        assert len(again.reconciled_items) == len(out.reconciled_items)
        assert again.missing_items == []
        assert again.additional_items == []

    def test_inputs_not_mutated(self):
        expected = [expected_item("Milk", quantity=2)]
        observed = [observed_item("Milk")]

        reconcile(expected, observed)

        assert expected[0].status == "pending"
        assert expected[0].quantity == 2
        assert len(observed) == 1


class TestEfficiency:
    """Tests for the efficiency score."""

    def test_empty_trip(self):
        assert calculate_efficiency(0, 0, 0) == 1.0

    def test_all_confirmed(self):
        assert calculate_efficiency(4, 0, 4) == 1.0

    def test_penalty(self):
        assert calculate_efficiency(2, 1, 3) == pytest.approx(0.5)

    def test_clamped_at_zero(self):
        assert calculate_efficiency(0, 4, 4) == 0.0

    def test_summarize_counts(self):
        items = [
            expected_item("Milk", status="confirmed"),
            expected_item("Cheese", status="modified"),
            expected_item("Bread", status="not_purchased"),
            expected_item("Eggs"),
            observed_item("Apple", category="fruits"),
            PurchaseItem(name="Gum", source="manual", status="confirmed"),
        ]

        counts = summarize_counts(items)

        assert counts.total_items == 6
        assert counts.confirmed_items == 4
        assert counts.not_purchased_items == 1
        assert counts.additional_items == 2
        assert counts.efficiency == pytest.approx(4 / 6 - 1 / 6 * 0.5)
