# smartlist/engine/comparison_builder.py

"""Merge the shopper's selection with per-store price rows."""

import logging
from collections.abc import Iterable, Sequence

from smartlist.models.comparison import ComparisonRow, ComparisonTable
from smartlist.models.selection import Selection

logger = logging.getLogger("smartlist.engine")


def stores_in_order(rows: Iterable[ComparisonRow]) -> tuple[str, ...]:
    """Return store names in the order they first appear across *rows*."""
    seen: dict[str, None] = {}
    for row in rows:
        for store in row.prices_by_store:
            if store:
                seen.setdefault(store, None)
    return tuple(seen)


def collect_stores(rows: Iterable[ComparisonRow]) -> tuple[str, ...]:
    """Return every store referenced by *rows*, deduplicated and sorted.

    The result only depends on the set of rows, not on their order, so
    it is safe to use for column ordering.
    """
    return tuple(sorted(stores_in_order(rows)))


def build_comparison(
    selection: Selection,
    rows: Sequence[ComparisonRow],
) -> ComparisonTable:
    """Build the comparison table for *selection* from API *rows*.

    Rows keep the order the pricing API returned them in.  Selected
    products the API did not price are not an error; they are only
    listed in ``missing_keys``.
    """
    priced_keys = {row.product_key for row in rows}
    missing = tuple(
        key for key in selection.keys() if key not in priced_keys
    )
    if missing:
        logger.debug(
            "No price rows for %d selected products: %s",
            len(missing),
            ", ".join(missing),
        )

    order = stores_in_order(rows)
    table = ComparisonTable(
        rows=tuple(rows),
        stores=tuple(sorted(order)),
        store_order=order,
        missing_keys=missing,
    )
    logger.debug(
        "Built comparison: %d rows across %d stores",
        len(table.rows),
        len(table.stores),
    )
    return table
