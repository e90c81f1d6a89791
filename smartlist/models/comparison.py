# smartlist/models/comparison.py

"""Comparison and allocation data models shared by the engine."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class StorePriceCell:
    """One store's price observation for a product, as received."""

    price: str
    unit_price: str | None = None
    source_url: str | None = None
    scraped_at: str | None = None


@dataclass(frozen=True)
class ComparisonRow:
    """One product's prices across every store that lists it."""

    product_key: str
    name: str
    packaging_format: str | None = None
    image: str | None = None
    prices_by_store: Mapping[str, StorePriceCell] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        # Freeze the mapping while keeping its insertion order
        object.__setattr__(
            self,
            "prices_by_store",
            MappingProxyType(dict(self.prices_by_store)),
        )


@dataclass(frozen=True)
class ComparisonTable:
    """Rows plus the store columns derived from them."""

    rows: tuple[ComparisonRow, ...] = ()
    stores: tuple[str, ...] = ()
    store_order: tuple[str, ...] = ()
    missing_keys: tuple[str, ...] = ()


@dataclass(frozen=True)
class RowHighlight:
    """Best/worst flags for one comparison row."""

    product_key: str
    best: float | None
    worst: float | None
    best_stores: frozenset[str] = frozenset()
    worst_stores: frozenset[str] = frozenset()

    @property
    def has_price(self) -> bool:
        return self.best is not None

    def is_best(self, store: str) -> bool:
        return store in self.best_stores

    def is_worst(self, store: str) -> bool:
        return store in self.worst_stores


@dataclass(frozen=True)
class BestPick:
    """Cheapest price for a product and every store offering it."""

    product_key: str
    price: float | None
    stores: tuple[str, ...] = ()

    @property
    def has_price(self) -> bool:
        return self.price is not None


@dataclass(frozen=True)
class AllocationItem:
    """A product assigned to a store by an allocation policy."""

    product_key: str
    name: str
    store: str
    price_text: str
    price: float
    packaging_format: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class AllocationGroup:
    """The products one store receives under an allocation policy."""

    store: str
    items: tuple[AllocationItem, ...] = ()

    @property
    def total(self) -> float:
        return sum(item.price for item in self.items)
