# smartlist/models/product.py

"""Product data model for the user's shopping selection."""

from dataclasses import dataclass

from smartlist.config.settings import Settings


def make_product_key(
    name: str,
    packaging_format: str | None = None,
    canonical_id: str | None = None,
) -> str:
    """Derive the case-insensitive identity key for a product.

    The canonical identifier wins when present; otherwise the key is the
    name and packaging format joined by ``Settings.PRODUCT_KEY_SEPARATOR``.
    """
    if canonical_id:
        return canonical_id.lower()
    suffix = packaging_format or ""
    sep = Settings.PRODUCT_KEY_SEPARATOR
    return f"{name}{sep}{suffix}".lower()


@dataclass(frozen=True)
class Product:
    """A product the shopper picked from the search suggestions."""

    key: str
    name: str
    packaging_format: str | None = None
    thumbnail: str = Settings.PLACEHOLDER_THUMBNAIL

    @classmethod
    def from_api(cls, payload: dict[str, object]) -> "Product":
        """Build a Product from a ``/products/search`` entry.

        Raises ``ValueError`` when the entry has no usable name.
        """
        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Search entry without a name: {payload!r}")
        packaging = payload.get("packaging_format")
        packaging_format = (
            packaging if isinstance(packaging, str) and packaging else None
        )
        canonical = payload.get("product_key")
        image = payload.get("image")
        return cls(
            key=make_product_key(
                name,
                packaging_format,
                canonical if isinstance(canonical, str) else None,
            ),
            name=name,
            packaging_format=packaging_format,
            thumbnail=(
                image
                if isinstance(image, str) and image
                else Settings.PLACEHOLDER_THUMBNAIL
            ),
        )
