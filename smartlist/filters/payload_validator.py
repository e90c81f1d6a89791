# smartlist/filters/payload_validator.py

"""Validate raw Products API payloads before they reach the engine."""

import logging
from typing import Any

from smartlist.models.comparison import ComparisonRow, StorePriceCell

logger = logging.getLogger("smartlist.filters")


class PayloadError(ValueError):
    """The API payload does not have the expected top-level shape."""


def _optional_str(value: Any) -> str | None:
    """Coerce blank or non-string optionals to ``None``."""
    if isinstance(value, str) and value.strip():
        return value
    return None


class PayloadValidator:
    """Turn ``/products/compare`` JSON into validated ComparisonRows."""

    @staticmethod
    def _validate_cells(
        product_key: str, raw_prices: Any
    ) -> dict[str, StorePriceCell]:
        """Keep well-formed store cells, preserving their order."""
        if not isinstance(raw_prices, dict):
            return {}
        cells: dict[str, StorePriceCell] = {}
        for store, raw in raw_prices.items():
            if not isinstance(store, str) or not store.strip():
                continue
            if not isinstance(raw, dict) or not isinstance(
                raw.get("price"), str
            ):
                logger.debug(
                    "Dropped malformed price cell (product=%s, store=%s)",
                    product_key,
                    store,
                )
                continue
            cells[store] = StorePriceCell(
                price=raw["price"],
                unit_price=_optional_str(raw.get("unit_price")),
                source_url=_optional_str(raw.get("source_url")),
                scraped_at=_optional_str(raw.get("scraped_at")),
            )
        return cells

    @staticmethod
    def validate(payload: Any) -> tuple[list[ComparisonRow], int]:
        """Validate a compare payload.

        Entries without a string ``product_key`` or ``name`` are dropped,
        as are repeated product keys (the first occurrence wins).

        Returns the valid rows and the count of dropped entries.
        Raises :class:`PayloadError` when *payload* is not a list.
        """
        if not isinstance(payload, list):
            raise PayloadError(
                f"Expected a list of rows, got {type(payload).__name__}"
            )

        rows: list[ComparisonRow] = []
        seen: set[str] = set()
        dropped = 0

        for entry in payload:
            if not isinstance(entry, dict):
                dropped += 1
                continue
            key = entry.get("product_key")
            name = entry.get("name")
            if not isinstance(key, str) or not key:
                logger.debug("Dropped row without product_key: %r", entry)
                dropped += 1
                continue
            if not isinstance(name, str):
                logger.debug("Dropped row without name (key=%s)", key)
                dropped += 1
                continue
            if key in seen:
                logger.debug("Dropped duplicate row (key=%s)", key)
                dropped += 1
                continue
            seen.add(key)
            rows.append(
                ComparisonRow(
                    product_key=key,
                    name=name,
                    packaging_format=_optional_str(
                        entry.get("packaging_format")
                    ),
                    image=_optional_str(entry.get("image")),
                    prices_by_store=PayloadValidator._validate_cells(
                        key, entry.get("prices_by_store")
                    ),
                )
            )

        if dropped:
            logger.info(
                "Payload validation dropped %d malformed rows", dropped
            )

        return rows, dropped
