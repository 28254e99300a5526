"""Barcode lookup across several food data providers."""

from typing import Any

from mealprint.ingest.connectors.base import (
    ConnectorError,
    FoodDataConnector,
    ParsedFoodBarcode,
)
from mealprint.ingest.connectors.nutritionix import NutritionixConnector
from mealprint.ingest.connectors.openfoodfacts import OpenFoodFactsConnector
from mealprint.ingest.connectors.upcitemdb import UpcItemDbConnector
from mealprint.logging_config import get_logger

logger = get_logger(__name__)


def default_connectors() -> list[FoodDataConnector]:
    """Providers in lookup priority order."""
    return [
        OpenFoodFactsConnector(),
        UpcItemDbConnector(),
        NutritionixConnector(),
    ]


class FoodLookupService(FoodDataConnector):
    """
    Looks up a barcode in each provider in turn:
    - Providers without credentials are skipped
    - A failing provider is logged and the next one is tried
    - The first provider with a usable result wins
    """

    def __init__(self, connectors: list[FoodDataConnector] | None = None):
        self.connectors = connectors if connectors is not None else default_connectors()

    @property
    def name(self) -> str:
        """Return service name."""
        return "food-lookup"

    @property
    def active_connectors(self) -> list[FoodDataConnector]:
        """Connectors that have the credentials they need."""
        return [connector for connector in self.connectors if connector.is_configured]

    async def lookup_barcode(self, barcode: str) -> ParsedFoodBarcode | None:
        """
        Look up a barcode across providers.

        Returns:
            The first usable result, or None if no provider knows the barcode.

        Raises:
            ConnectorError: If every provider that was tried failed.
        """
        connectors = self.active_connectors
        failures: list[str] = []

        for connector in connectors:
            try:
                result = await connector.lookup_barcode(barcode)
            except Exception as e:
                logger.warning(f"Provider {connector.name} failed for barcode {barcode}: {e}")
                failures.append(connector.name)
                continue

            if result is not None:
                logger.info(f"Barcode {barcode} matched provider {connector.name}")
                return result

        if connectors and len(failures) == len(connectors):
            raise ConnectorError(f"All food providers failed: {', '.join(failures)}")

        logger.info(f"No providers returned results for barcode {barcode}")
        return None

    async def health_check(self) -> bool:
        """Check if at least one configured provider is reachable."""
        for connector in self.active_connectors:
            if await connector.health_check():
                return True
        return False

    async def close(self) -> None:
        """Close every provider."""
        for connector in self.connectors:
            await connector.close()

    async def __aenter__(self) -> "FoodLookupService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
