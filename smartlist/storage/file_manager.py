# smartlist/storage/file_manager.py

"""Handles saving comparison plans to disk."""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from smartlist.config.settings import Settings
from smartlist.models.comparison import AllocationGroup, ComparisonTable
from smartlist.services.plan_service import PlanResult

logger = logging.getLogger("smartlist.storage")


def _groups_to_dicts(
    groups: list[AllocationGroup],
) -> list[dict[str, Any]]:
    return [
        {
            "store": g.store,
            "total": round(g.total, 2),
            "items": [
                {
                    "product_key": i.product_key,
                    "name": i.name,
                    "packaging_format": i.packaging_format,
                    "price": i.price_text,
                }
                for i in g.items
            ],
        }
        for g in groups
    ]


def plan_to_dict(result: PlanResult) -> dict[str, Any]:
    """Serialise a plan to plain dicts for JSON output."""
    highlights = {h.product_key: h for h in result.highlights}
    picks = {p.product_key: p for p in result.best_picks}
    rows: list[dict[str, Any]] = []
    for row in result.table.rows:
        hl = highlights[row.product_key]
        pick = picks[row.product_key]
        rows.append(
            {
                "product_key": row.product_key,
                "name": row.name,
                "packaging_format": row.packaging_format,
                "prices": {
                    store: cell.price
                    for store, cell in row.prices_by_store.items()
                },
                "best_price": pick.price,
                "best_stores": list(pick.stores),
                "worst_stores": sorted(hl.worst_stores),
            }
        )
    return {
        "stores": list(result.table.stores),
        "rows": rows,
        "missing": list(result.table.missing_keys),
        "cheapest": _groups_to_dicts(result.cheapest_groups),
        "availability": _groups_to_dicts(result.availability_groups),
        "errors": list(result.errors),
    }


def _grid(table: ComparisonTable) -> list[list[str]]:
    """Header plus one line per product, one column per store."""
    lines = [["Product", "Packaging", *table.stores]]
    for row in table.rows:
        cells = [
            row.prices_by_store[s].price
            if s in row.prices_by_store
            else ""
            for s in table.stores
        ]
        lines.append([row.name, row.packaging_format or "", *cells])
    return lines


class FileManager:
    """Handles saving comparison plans to disk."""

    def __init__(self) -> None:
        self.results_dir: Path = Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised, results_dir=%s", self.results_dir)

    def save_plan(self, result: PlanResult, label: str = "plan") -> Path:
        """Save a plan to a timestamped JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.results_dir / f"{label}_{timestamp}.json"

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(plan_to_dict(result), f, ensure_ascii=False, indent=2)

        logger.info(
            "Saved plan for %d products to %s",
            len(result.table.rows),
            filepath,
        )
        return filepath

    def export_csv(self, result: PlanResult, label: str = "compare") -> Path:
        """Export the comparison grid to a CSV file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.results_dir / f"export_{label}_{timestamp}.csv"

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(_grid(result.table))

        logger.info(
            "Exported %d comparison rows to %s",
            len(result.table.rows),
            filepath,
        )
        return filepath

    @staticmethod
    def format_tsv(result: PlanResult) -> str:
        """Format the comparison grid as tab-separated text."""
        return "\n".join("\t".join(line) for line in _grid(result.table))
