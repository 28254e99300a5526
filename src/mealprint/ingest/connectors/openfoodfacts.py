"""Open Food Facts API connector for barcode food lookups."""

from typing import Any

from mealprint.config import get_settings
from mealprint.ingest.connectors.base import ParsedFoodBarcode, parse_float
from mealprint.ingest.connectors.http import HttpFoodConnector
from mealprint.logging_config import get_logger

logger = get_logger(__name__)

SOURCE_NAME = "Open Food Facts"
SOURCE_CONFIDENCE = 0.85


def _nutriment(nutriments: dict[str, Any], key: str) -> float:
    """Read a nutriment per 100g, falling back to the unqualified key when absent."""
    value = nutriments.get(f"{key}_100g")
    if value is None:
        value = nutriments.get(key)
    return parse_float(value) or 0.0


def parse_product(barcode: str, data: dict[str, Any]) -> ParsedFoodBarcode | None:
    """
    Parse an Open Food Facts v2 product response.

    Returns None when the product or its nutriments are missing, or when
    every macro is zero.
    """
    product = data.get("product")
    if not isinstance(product, dict):
        return None

    nutriments = product.get("nutriments")
    if not isinstance(nutriments, dict) or not nutriments:
        return None

    serving_size = product.get("serving_size") or None
    if serving_size is None and product.get("serving_quantity"):
        serving_size = f"{product['serving_quantity']}{product.get('serving_unit') or 'g'}"

    return ParsedFoodBarcode.from_macros(
        barcode=barcode,
        source=SOURCE_NAME,
        confidence=SOURCE_CONFIDENCE,
        name=product.get("product_name"),
        calories=_nutriment(nutriments, "energy-kcal"),
        protein=_nutriment(nutriments, "proteins"),
        carbs=_nutriment(nutriments, "carbohydrates"),
        fat=_nutriment(nutriments, "fat"),
        sugar=_nutriment(nutriments, "sugars"),
        added_sugar=_nutriment(nutriments, "added-sugars"),
        serving_size=serving_size,
    )


class OpenFoodFactsConnector(HttpFoodConnector):
    """Connector for the Open Food Facts public API (no key required)."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        super().__init__(
            base_url or get_settings().openfoodfacts_base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    @property
    def name(self) -> str:
        """Return connector name."""
        return "openfoodfacts"

    async def lookup_barcode(self, barcode: str) -> ParsedFoodBarcode | None:
        """
        Look up a product by barcode.

        Args:
            barcode: EAN/UPC barcode digits.

        Returns:
            Parsed nutrition facts, or None if the product is unknown or has
            no usable nutrition data.
        """
        barcode = barcode.strip()
        if not barcode.isdigit():
            logger.warning(f"Rejecting non-numeric barcode: {barcode!r}")
            return None

        logger.info(f"Looking up barcode {barcode}")
        response = await self._request(f"api/v2/product/{barcode}.json")

        if response.is_not_found or not isinstance(response.data, dict):
            logger.info(f"No product found for barcode {barcode}")
            return None

        parsed = parse_product(barcode, response.data)
        if parsed is None:
            logger.info(f"Product {barcode} has no usable nutrition data")
        return parsed

    async def health_check(self) -> bool:
        """Check if Open Food Facts is reachable."""
        return await self._ping("api/v2/search", params={"page_size": 1})
