# smartlist/engine/allocation.py

"""Split a shopping list across stores.

Two independent policies are offered:

* **cheapest store**: every product goes to the store where it is
  cheapest.  Exact ties go to the first store encountered, in an
  explicit ``store_order`` when one is given.
* **availability ranked**: stores are ranked by how many of the
  products they price, and each product goes to the highest ranked
  store that carries it.  This favours fewer, more complete trips at
  the cost of potentially higher prices.

Both functions are pure.  Products without a parseable price in any
store are left out of every group.
"""

import logging
from collections.abc import Iterator, Sequence

from smartlist.engine.price_normalizer import parse_price
from smartlist.models.comparison import (
    AllocationGroup,
    AllocationItem,
    ComparisonRow,
)

logger = logging.getLogger("smartlist.engine")


def _iter_row_stores(
    row: ComparisonRow,
    store_order: Sequence[str] | None,
) -> Iterator[str]:
    """Yield the row's stores, *store_order* first, then mapping order."""
    if store_order is None:
        yield from row.prices_by_store
        return
    listed = set(store_order)
    for store in store_order:
        if store in row.prices_by_store:
            yield store
    for store in row.prices_by_store:
        if store not in listed:
            yield store


def _make_item(
    row: ComparisonRow, store: str, price: float
) -> AllocationItem:
    return AllocationItem(
        product_key=row.product_key,
        name=row.name,
        store=store,
        price_text=row.prices_by_store[store].price,
        price=price,
        packaging_format=row.packaging_format,
        image=row.image,
    )


def allocate_cheapest(
    rows: Sequence[ComparisonRow],
    store_order: Sequence[str] | None = None,
) -> list[AllocationGroup]:
    """Assign each product to its cheapest store.

    Exact ties go to the first store visited.  Without *store_order*
    each row's own mapping order decides.  ``build_plan`` passes the
    order stores first appear across the whole response instead, so a
    row listed as ``{B: 2, A: 2}`` after a row listing ``A`` before ``B``
    goes to ``A`` there, not to ``B``.

    Groups are sorted by store name; items keep the order of *rows*.
    """
    by_store: dict[str, list[AllocationItem]] = {}
    skipped = 0

    for row in rows:
        best_store: str | None = None
        best_price: float | None = None
        for store in _iter_row_stores(row, store_order):
            value = parse_price(row.prices_by_store[store].price)
            if value is None:
                continue
            # Strict comparison keeps the first store on ties
            if best_price is None or value < best_price:
                best_store = store
                best_price = value

        if best_store is None or best_price is None:
            skipped += 1
            continue
        by_store.setdefault(best_store, []).append(
            _make_item(row, best_store, best_price)
        )

    if skipped:
        logger.debug(
            "Cheapest allocation skipped %d unpriced products", skipped
        )

    return [
        AllocationGroup(store=store, items=tuple(by_store[store]))
        for store in sorted(by_store)
    ]


def availability_counts(
    rows: Sequence[ComparisonRow],
    stores: Sequence[str],
) -> dict[str, int]:
    """Count, per store, the rows that have a parseable price there."""
    counts = {store: 0 for store in stores}
    for row in rows:
        for store in stores:
            cell = row.prices_by_store.get(store)
            if cell is not None and parse_price(cell.price) is not None:
                counts[store] += 1
    return counts


def rank_stores_by_availability(
    rows: Sequence[ComparisonRow],
    stores: Sequence[str],
) -> list[str]:
    """Rank *stores* by coverage (descending), then by name."""
    counts = availability_counts(rows, stores)
    return sorted(counts, key=lambda s: (-counts[s], s))


def allocate_by_availability(
    rows: Sequence[ComparisonRow],
    stores: Sequence[str],
) -> list[AllocationGroup]:
    """Assign each product to the best-stocked store that prices it.

    Groups come out in ranking order; stores that receive nothing are
    omitted.
    """
    ranked = rank_stores_by_availability(rows, stores)
    by_store: dict[str, list[AllocationItem]] = {s: [] for s in ranked}

    for row in rows:
        for store in ranked:
            cell = row.prices_by_store.get(store)
            if cell is None:
                continue
            value = parse_price(cell.price)
            if value is not None:
                by_store[store].append(_make_item(row, store, value))
                break

    logger.debug(
        "Availability ranking: %s", ", ".join(ranked) or "(no stores)"
    )
    return [
        AllocationGroup(store=store, items=tuple(items))
        for store, items in by_store.items()
        if items
    ]
