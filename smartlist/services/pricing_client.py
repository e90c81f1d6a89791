# smartlist/services/pricing_client.py

"""HTTP client for the Products API (search and store comparison)."""

import json
import logging
import time
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlencode

from curl_cffi import requests as curl_requests

from smartlist.config.settings import Settings
from smartlist.filters.payload_validator import PayloadError, PayloadValidator
from smartlist.models.comparison import ComparisonRow
from smartlist.models.product import Product
from smartlist.models.selection import Selection


class PricingApiError(Exception):
    """A Products API call failed; ``str(exc)`` is user-presentable."""


class ProductsApiClient:
    """Talks to the Products API over a browser-impersonating session."""

    def __init__(self, base_url: str | None = None) -> None:
        self.logger = logging.getLogger("smartlist.api")
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _unreachable(self) -> PricingApiError:
        return PricingApiError(
            f"Cannot reach Products API ({self.base_url})"
        )

    def _get_json(self, path: str, query: str) -> Any:
        """GET ``path?query`` with retries and return the decoded body.

        Non-200 responses fail immediately; transport errors are retried
        up to ``MAX_RETRIES`` times with a linear backoff.
        """
        url = f"{self.base_url}{path}?{query}"
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self._request_timeout,
                )
            except Exception as exc:
                self.logger.warning(
                    "Request error on attempt %d for %s: %s",
                    attempt + 1,
                    path,
                    exc,
                    exc_info=True,
                )
                time.sleep(self.settings.RETRY_DELAY * (attempt + 1))
                continue

            if resp.status_code != 200:
                self.logger.warning(
                    "HTTP %d from %s", resp.status_code, path
                )
                raise PricingApiError(f"API error: {resp.status_code}")
            try:
                return json.loads(resp.text)
            except ValueError as exc:
                self.logger.error(
                    "Invalid JSON from %s", path, exc_info=True
                )
                raise PricingApiError(
                    "API error: invalid JSON response"
                ) from exc

        self.logger.error(
            "Products API unreachable after %d attempts",
            self.settings.MAX_RETRIES,
        )
        raise self._unreachable()

    def search(
        self,
        query: str,
        limit: int | None = None,
        exclude: Selection | None = None,
    ) -> list[Product]:
        """Return product suggestions for *query*.

        Suggestions already present in *exclude* are filtered out.
        Blank queries return an empty list without a request.
        """
        query = query.strip()
        if not query:
            return []

        params = urlencode(
            {"q": query, "limit": limit or self.settings.SEARCH_LIMIT}
        )
        data = self._get_json(self.settings.SEARCH_PATH, params)
        if not isinstance(data, list):
            raise PricingApiError("API error: unexpected search payload")

        suggestions: list[Product] = []
        for entry in data:
            if not isinstance(entry, dict):
                continue
            try:
                product = Product.from_api(entry)
            except ValueError:
                self.logger.debug("Skipped search entry: %r", entry)
                continue
            if exclude is not None and product.key in exclude:
                continue
            suggestions.append(product)

        self.logger.info(
            "Search '%s' returned %d suggestions", query, len(suggestions)
        )
        return suggestions

    def compare(self, keys: Sequence[str]) -> list[ComparisonRow]:
        """Fetch per-store prices for the products identified by *keys*.

        No keys means no request and no rows.
        """
        keys = [k for k in keys if k]
        if not keys:
            return []

        params = urlencode([("key", k) for k in keys])
        data = self._get_json(self.settings.COMPARE_PATH, params)
        try:
            rows, dropped = PayloadValidator.validate(data)
        except PayloadError as exc:
            self.logger.error("Rejected compare payload: %s", exc)
            raise PricingApiError(
                "API error: unexpected compare payload"
            ) from exc

        self.logger.info(
            "Compare for %d keys returned %d rows (%d dropped)",
            len(keys),
            len(rows),
            dropped,
        )
        return rows

    def close(self) -> None:
        self.session.close()
