# tests/test_plan_service.py

"""Tests for ShoppingPlanner and build_plan."""

import asyncio
import threading
import unittest
from unittest.mock import MagicMock

from smartlist.models.comparison import ComparisonRow, StorePriceCell
from smartlist.models.product import Product
from smartlist.models.selection import Selection
from smartlist.services.plan_service import (
    PlanResult,
    ShoppingPlanner,
    build_plan,
)
from smartlist.services.pricing_client import PricingApiError


def _row(key: str, prices: dict[str, str]) -> ComparisonRow:
    """Create a ComparisonRow with raw price text per store."""
    return ComparisonRow(
        product_key=key,
        name=key.title(),
        prices_by_store={
            s: StorePriceCell(price=p) for s, p in prices.items()
        },
    )


def _selection(*keys: str) -> Selection:
    return Selection(tuple(Product(key=k, name=k) for k in keys))


ROWS = [
    _row("milk", {"Pak'nSave": "$3.00", "Countdown": "$3.00", "New World": "$5.00"}),
    _row("eggs", {"Countdown": "$8.50"}),
    _row("bread", {"New World": "n/a"}),
]


class TestBuildPlan(unittest.TestCase):
    """build_plan ties the engine together."""

    def setUp(self) -> None:
        self.result = build_plan(
            _selection("milk", "eggs", "bread", "jam"), ROWS
        )

    def test_stores_sorted(self) -> None:
        """Store columns are sorted by name."""
        self.assertEqual(
            self.result.table.stores,
            ("Countdown", "New World", "Pak'nSave"),
        )

    def test_missing_reported(self) -> None:
        """Unpriced selections are listed, not raised."""
        self.assertEqual(self.result.table.missing_keys, ("jam",))

    def test_highlights_per_row(self) -> None:
        """Each row gets best/worst flags."""
        milk = self.result.highlights[0]
        self.assertEqual(milk.best_stores, {"Countdown", "Pak'nSave"})
        self.assertEqual(milk.worst_stores, {"New World"})
        self.assertFalse(self.result.highlights[2].has_price)

    def test_best_picks(self) -> None:
        """Best picks list tied stores alphabetically."""
        milk = self.result.best_picks[0]
        self.assertEqual(milk.stores, ("Countdown", "Pak'nSave"))
        self.assertIsNone(self.result.best_picks[2].price)

    def test_cheapest_uses_first_seen_store_order(self) -> None:
        """The milk tie goes to the store seen first in the response."""
        summary = [
            (g.store, [i.product_key for i in g.items])
            for g in self.result.cheapest_groups
        ]
        self.assertEqual(
            summary, [("Countdown", ["eggs"]), ("Pak'nSave", ["milk"])]
        )

    def test_tie_uses_response_order_not_row_order(self) -> None:
        """A later row listing B before A still ties to A."""
        rows = [
            _row("first", {"A": "1", "B": "9"}),
            _row("second", {"B": "2", "A": "2"}),
        ]
        result = build_plan(_selection("first", "second"), rows)
        summary = [
            (g.store, [i.product_key for i in g.items])
            for g in result.cheapest_groups
        ]
        self.assertEqual(summary, [("A", ["first", "second"])])

    def test_availability_groups(self) -> None:
        """Countdown covers both priced products."""
        summary = [
            (g.store, [i.product_key for i in g.items])
            for g in self.result.availability_groups
        ]
        self.assertEqual(summary, [("Countdown", ["milk", "eggs"])])

    def test_deterministic(self) -> None:
        """Same input, same plan."""
        again = build_plan(_selection("milk", "eggs", "bread", "jam"), ROWS)
        self.assertEqual(again, self.result)


class TestShoppingPlanner(unittest.IsolatedAsyncioTestCase):
    """ShoppingPlanner.plan behaviour."""

    async def test_plan_fetches_and_builds(self) -> None:
        """Rows from the client flow into the plan."""
        client = MagicMock()
        client.compare.return_value = ROWS
        planner = ShoppingPlanner(client)

        result = await planner.plan(_selection("milk", "eggs", "bread"))

        assert result is not None
        self.assertIsInstance(result, PlanResult)
        self.assertEqual(len(result.table.rows), 3)
        self.assertEqual(result.errors, [])
        client.compare.assert_called_once_with(["milk", "eggs", "bread"])

    async def test_empty_selection(self) -> None:
        """An empty list gives an empty plan without a request."""
        client = MagicMock()
        result = await ShoppingPlanner(client).plan(Selection())
        assert result is not None
        self.assertEqual(result.table.rows, ())
        client.compare.assert_not_called()

    async def test_clearing_selection_discards_older_plan(self) -> None:
        """A plan still in flight when the list is cleared is dropped."""
        release = threading.Event()

        def slow_compare(keys: list[str]) -> list[ComparisonRow]:
            release.wait(timeout=5)
            return [_row("milk", {"A": "$2.00"})]

        client = MagicMock()
        client.compare.side_effect = slow_compare
        planner = ShoppingPlanner(client)
        try:
            older = asyncio.create_task(planner.plan(_selection("milk")))
            await asyncio.sleep(0.05)
            cleared = await planner.plan(Selection())
        finally:
            release.set()

        self.assertIsNone(await older)
        assert cleared is not None
        self.assertEqual(cleared.table.rows, ())
        self.assertEqual(cleared.cheapest_groups, [])
        self.assertEqual(cleared.errors, [])

    async def test_api_error_reported(self) -> None:
        """Client failures become a single user-visible message."""
        client = MagicMock()
        client.compare.side_effect = PricingApiError(
            "Cannot reach Products API (http://localhost:8000)"
        )
        result = await ShoppingPlanner(client).plan(_selection("milk"))
        assert result is not None
        self.assertEqual(
            result.errors,
            ["Cannot reach Products API (http://localhost:8000)"],
        )
        self.assertEqual(result.cheapest_groups, [])


if __name__ == "__main__":
    unittest.main()
