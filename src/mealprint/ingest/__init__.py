"""Food data lookups from external API sources."""

from mealprint.ingest.connectors import (
    ConnectorError,
    NutritionixConnector,
    OpenFoodFactsConnector,
    ParsedFoodBarcode,
    UpcItemDbConnector,
)
from mealprint.ingest.lookup import FoodLookupService

__all__ = [
    "ConnectorError",
    "FoodLookupService",
    "NutritionixConnector",
    "OpenFoodFactsConnector",
    "ParsedFoodBarcode",
    "UpcItemDbConnector",
]
