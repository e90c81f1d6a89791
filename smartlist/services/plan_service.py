# smartlist/services/plan_service.py

"""Orchestrates price comparison and shopping list splitting."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from smartlist.engine.allocation import (
    allocate_by_availability,
    allocate_cheapest,
)
from smartlist.engine.best_price import best_pick, highlight_row
from smartlist.engine.comparison_builder import build_comparison
from smartlist.models.comparison import (
    AllocationGroup,
    BestPick,
    ComparisonRow,
    ComparisonTable,
    RowHighlight,
)
from smartlist.models.selection import Selection
from smartlist.services.compare_fetcher import CompareFetcher
from smartlist.services.pricing_client import PricingApiError, ProductsApiClient

logger = logging.getLogger("smartlist.planner")


@dataclass
class PlanResult:
    """Everything the display layer needs for one selection."""

    selection: Selection
    table: ComparisonTable = field(default_factory=ComparisonTable)
    highlights: list[RowHighlight] = field(
        default_factory=lambda: list[RowHighlight]()
    )
    best_picks: list[BestPick] = field(
        default_factory=lambda: list[BestPick]()
    )
    cheapest_groups: list[AllocationGroup] = field(
        default_factory=lambda: list[AllocationGroup]()
    )
    availability_groups: list[AllocationGroup] = field(
        default_factory=lambda: list[AllocationGroup]()
    )
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )


def build_plan(
    selection: Selection,
    rows: Sequence[ComparisonRow],
) -> PlanResult:
    """Run the comparison and both allocation policies over *rows*.

    Each policy sees the same table and nothing computed by the other.
    """
    table = build_comparison(selection, rows)
    return PlanResult(
        selection=selection,
        table=table,
        highlights=[highlight_row(r, table.stores) for r in table.rows],
        best_picks=[best_pick(r) for r in table.rows],
        cheapest_groups=allocate_cheapest(table.rows, table.store_order),
        availability_groups=allocate_by_availability(
            table.rows, table.stores
        ),
    )


class ShoppingPlanner:
    """Fetches prices for a selection and builds its plan."""

    def __init__(self, client: ProductsApiClient | None = None) -> None:
        self.client = client or ProductsApiClient()
        self._fetcher = CompareFetcher(self.client)

    async def plan(self, selection: Selection) -> PlanResult | None:
        """Build the plan for *selection*.

        Returns ``None`` when a newer :meth:`plan` call superseded this
        one.  API failures are reported in ``PlanResult.errors``.

        An empty selection still goes through the fetcher so that any
        in-flight request for an older selection is cancelled.
        """
        try:
            rows = await self._fetcher.request(selection)
        except PricingApiError as exc:
            logger.error(
                "Price fetch failed for %d products: %s",
                len(selection),
                exc,
                exc_info=True,
            )
            return PlanResult(selection=selection, errors=[str(exc)])

        if rows is None:
            return None

        result = build_plan(selection, rows)
        logger.info(
            "Plan built: %d rows, %d stores, %d/%d groups",
            len(result.table.rows),
            len(result.table.stores),
            len(result.cheapest_groups),
            len(result.availability_groups),
        )
        return result
