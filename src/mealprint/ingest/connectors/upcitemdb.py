"""UPCItemDB API connector for barcode food lookups."""

from typing import Any

from mealprint.config import get_settings
from mealprint.ingest.connectors.base import ParsedFoodBarcode, parse_float
from mealprint.ingest.connectors.http import HttpFoodConnector
from mealprint.logging_config import get_logger

logger = get_logger(__name__)

SOURCE_NAME = "UPCItemDB"
SOURCE_CONFIDENCE = 0.8


def _nutrition_value(nutrition: dict[str, Any], *keys: str) -> float:
    """
    Read the first present nutrition value.

    UPCItemDB reports values either directly (``"fat": 3``) or wrapped
    (``"fat": {"value": 3, "unit": "g"}``).
    """
    for key in keys:
        raw = nutrition.get(key)
        if isinstance(raw, dict):
            raw = raw.get("value")
        value = parse_float(raw)
        if value is not None:
            return value
    return 0.0


def parse_item(barcode: str, data: dict[str, Any]) -> ParsedFoodBarcode | None:
    """Parse the first item of a UPCItemDB lookup response."""
    items = data.get("items")
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None

    item = items[0]
    nutrition = item.get("nutrition")
    if not isinstance(nutrition, dict):
        return None

    serving_size = item.get("serving_size")
    return ParsedFoodBarcode.from_macros(
        barcode=barcode,
        source=SOURCE_NAME,
        confidence=SOURCE_CONFIDENCE,
        name=item.get("title"),
        calories=_nutrition_value(nutrition, "calories"),
        protein=_nutrition_value(nutrition, "protein"),
        carbs=_nutrition_value(nutrition, "carbohydrates"),
        fat=_nutrition_value(nutrition, "fat"),
        sugar=_nutrition_value(nutrition, "sugars", "sugar"),
        added_sugar=_nutrition_value(nutrition, "added_sugars", "added-sugars"),
        serving_size=str(serving_size) if serving_size is not None else None,
    )


class UpcItemDbConnector(HttpFoodConnector):
    """Connector for the UPCItemDB lookup API (requires a user key)."""

    def __init__(
        self,
        api_key: str | None = None,
        api_host: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.upcitemdb_api_key
        super().__init__(
            api_host if api_host is not None else settings.upcitemdb_api_host,
            timeout=timeout,
            max_retries=max_retries,
        )

    @property
    def name(self) -> str:
        """Return connector name."""
        return "upcitemdb"

    @property
    def is_configured(self) -> bool:
        """UPCItemDB needs both a key and a host."""
        return bool(self.api_key.strip() and self.base_url.strip())

    def _default_headers(self) -> dict[str, str]:
        headers = super()._default_headers()
        headers["user_key"] = self.api_key
        return headers

    async def lookup_barcode(self, barcode: str) -> ParsedFoodBarcode | None:
        """Look up a product by UPC, or return None when not configured."""
        if not self.is_configured:
            logger.debug("UPCItemDB credentials not set - skipping lookup")
            return None

        barcode = barcode.strip()
        response = await self._request(params={"upc": barcode})
        if not response.is_success or not isinstance(response.data, dict):
            return None
        return parse_item(barcode, response.data)

    async def health_check(self) -> bool:
        """Check if UPCItemDB is configured and reachable."""
        if not self.is_configured:
            return False
        return await self._ping(params={"upc": "0"})
