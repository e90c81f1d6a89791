# smartlist/models/selection.py

"""Immutable snapshot of the shopper's selected products."""

from dataclasses import dataclass

from smartlist.models.product import Product


@dataclass(frozen=True)
class Selection:
    """Ordered, duplicate-free list of products chosen by the shopper.

    Every change returns a new snapshot, so a planner working on one
    snapshot is never affected by later edits.
    """

    products: tuple[Product, ...] = ()

    def __len__(self) -> int:
        return len(self.products)

    def __contains__(self, key: object) -> bool:
        return any(p.key == key for p in self.products)

    def add(self, product: Product) -> "Selection":
        """Append *product* unless a product with the same key exists."""
        if product.key in self:
            return self
        return Selection(self.products + (product,))

    def remove(self, key: str) -> "Selection":
        """Drop the product identified by *key* (no-op when absent)."""
        return Selection(
            tuple(p for p in self.products if p.key != key)
        )

    def keys(self) -> list[str]:
        """Return the non-empty product keys in selection order."""
        return [p.key for p in self.products if p.key]
