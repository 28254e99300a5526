"""Nutritionix API connector for barcode food lookups."""

from typing import Any

from mealprint.config import get_settings
from mealprint.ingest.connectors.base import ParsedFoodBarcode, parse_float
from mealprint.ingest.connectors.http import HttpFoodConnector
from mealprint.logging_config import get_logger

logger = get_logger(__name__)

SOURCE_NAME = "Nutritionix"
SOURCE_CONFIDENCE = 0.9


def _first_value(food: dict[str, Any], *keys: str) -> float:
    for key in keys:
        value = parse_float(food.get(key))
        if value is not None:
            return value
    return 0.0


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def parse_food(barcode: str, data: dict[str, Any]) -> ParsedFoodBarcode | None:
    """
    Parse a Nutritionix item search response.

    Foods are listed under ``foods`` (or ``items`` on older responses); the
    first one is used. Nutrient keys are tried in ``nf_*`` then plain form.
    """
    foods = data.get("foods")
    if not isinstance(foods, list):
        foods = data.get("items")
    if not isinstance(foods, list) or not foods or not isinstance(foods[0], dict):
        return None

    food = foods[0]

    serving_weight = _text(food.get("serving_weight_grams"))
    serving_size = f"{serving_weight}g" if serving_weight is not None else _text(food.get("serving_size"))

    return ParsedFoodBarcode.from_macros(
        barcode=barcode,
        source=SOURCE_NAME,
        confidence=SOURCE_CONFIDENCE,
        name=_text(food.get("food_name")) or _text(food.get("item_name")),
        calories=_first_value(food, "nf_calories", "calories"),
        protein=_first_value(food, "nf_protein", "protein"),
        carbs=_first_value(food, "nf_total_carbohydrate", "total_carbohydrate"),
        fat=_first_value(food, "nf_total_fat", "total_fat"),
        sugar=_first_value(food, "nf_sugars", "sugars", "sugar"),
        added_sugar=_first_value(food, "nf_added_sugars", "added_sugars", "added-sugars"),
        serving_size=serving_size,
    )


class NutritionixConnector(HttpFoodConnector):
    """Connector for the Nutritionix track API (requires app id and key)."""

    def __init__(
        self,
        app_id: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        settings = get_settings()
        self.app_id = app_id if app_id is not None else settings.nutritionix_app_id
        self.api_key = api_key if api_key is not None else settings.nutritionix_api_key
        super().__init__(
            base_url or settings.nutritionix_base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    @property
    def name(self) -> str:
        """Return connector name."""
        return "nutritionix"

    @property
    def is_configured(self) -> bool:
        """Nutritionix needs both an app id and a key."""
        return bool(self.app_id.strip() and self.api_key.strip())

    def _default_headers(self) -> dict[str, str]:
        headers = super()._default_headers()
        headers.update(
            {
                "x-app-id": self.app_id,
                "x-app-key": self.api_key,
                "x-remote-user-id": "0",
            }
        )
        return headers

    async def lookup_barcode(self, barcode: str) -> ParsedFoodBarcode | None:
        """Look up a product by UPC, or return None when not configured."""
        if not self.is_configured:
            logger.debug("Nutritionix credentials not set - skipping lookup")
            return None

        barcode = barcode.strip()
        response = await self._request("v2/search/item", params={"upc": barcode})
        if not response.is_success or not isinstance(response.data, dict):
            return None
        return parse_food(barcode, response.data)

    async def health_check(self) -> bool:
        """Check if Nutritionix is configured and reachable."""
        if not self.is_configured:
            return False
        return await self._ping("v2/search/instant", params={"query": "apple"})
