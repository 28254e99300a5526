"""Connector interfaces for food data providers."""

from mealprint.ingest.connectors.base import (
    ConnectorError,
    ConnectorResponse,
    FoodDataConnector,
    ParsedFoodBarcode,
    RateLimitError,
)
from mealprint.ingest.connectors.http import HttpFoodConnector
from mealprint.ingest.connectors.nutritionix import NutritionixConnector
from mealprint.ingest.connectors.openfoodfacts import OpenFoodFactsConnector
from mealprint.ingest.connectors.upcitemdb import UpcItemDbConnector

__all__ = [
    "ConnectorError",
    "ConnectorResponse",
    "FoodDataConnector",
    "HttpFoodConnector",
    "NutritionixConnector",
    "OpenFoodFactsConnector",
    "ParsedFoodBarcode",
    "RateLimitError",
    "UpcItemDbConnector",
]
