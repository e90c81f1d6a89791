# smartlist/engine/best_price.py

"""Best and worst price detection for comparison rows."""

from collections.abc import Sequence

from smartlist.engine.price_normalizer import parse_price
from smartlist.models.comparison import BestPick, ComparisonRow, RowHighlight


def numeric_prices(
    row: ComparisonRow,
    stores: Sequence[str] | None = None,
) -> dict[str, float]:
    """Map each store with a parseable price to its numeric value.

    Only *stores* are considered when given; otherwise every store in
    the row, in mapping order.
    """
    candidates = row.prices_by_store if stores is None else stores
    prices: dict[str, float] = {}
    for store in candidates:
        cell = row.prices_by_store.get(store)
        if cell is None:
            continue
        value = parse_price(cell.price)
        if value is not None:
            prices[store] = value
    return prices


def highlight_row(
    row: ComparisonRow,
    stores: Sequence[str] | None = None,
) -> RowHighlight:
    """Flag the cheapest and most expensive stores for *row*.

    Every store tied at the minimum is flagged best.  Worst flags are
    suppressed when all available prices are equal, which includes the
    single-price case.
    """
    prices = numeric_prices(row, stores)
    if not prices:
        return RowHighlight(
            product_key=row.product_key, best=None, worst=None
        )

    low = min(prices.values())
    high = max(prices.values())
    best_stores = frozenset(s for s, v in prices.items() if v == low)
    worst_stores = (
        frozenset(s for s, v in prices.items() if v == high)
        if low != high
        else frozenset()
    )
    return RowHighlight(
        product_key=row.product_key,
        best=low,
        worst=high,
        best_stores=best_stores,
        worst_stores=worst_stores,
    )


def best_pick(row: ComparisonRow) -> BestPick:
    """Return the lowest price for *row* and the stores offering it.

    Tied stores are listed together in alphabetical order.
    """
    prices = numeric_prices(row)
    if not prices:
        return BestPick(product_key=row.product_key, price=None)
    low = min(prices.values())
    return BestPick(
        product_key=row.product_key,
        price=low,
        stores=tuple(sorted(s for s, v in prices.items() if v == low)),
    )


def format_best_pick(pick: BestPick) -> str:
    """Render *pick* as ``'3.00 @ A, B'`` or ``'No price'``."""
    if pick.price is None:
        return "No price"
    return f"{pick.price:,.2f} @ {', '.join(pick.stores)}"
