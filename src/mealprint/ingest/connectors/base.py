"""Base connector interface for food data providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from mealprint.normalize.nutrition import resolve_sugar


def parse_float(value: Any) -> float | None:
    """Read a numeric JSON value that may arrive as a number or a string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


@dataclass
class ParsedFoodBarcode:
    """Nutrition facts for a packaged food found by barcode."""

    barcode: str
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    sugar: float
    added_sugar: float
    serving_size: str | None
    raw_text: str
    confidence: float

    @classmethod
    def from_macros(
        cls,
        barcode: str,
        source: str,
        confidence: float,
        name: str | None,
        calories: float,
        protein: float,
        carbs: float,
        fat: float,
        sugar: float,
        added_sugar: float,
        serving_size: str | None = None,
    ) -> "ParsedFoodBarcode | None":
        """
        Build a result from raw provider macros.

        Returns None when every macro is zero. Missing sugar is estimated
        from carbs and the product name.
        """
        if calories == 0 and protein == 0 and carbs == 0 and fat == 0:
            return None

        name = name or "Unknown Product"
        return cls(
            barcode=barcode,
            name=name,
            calories=round(calories),
            protein=round(protein, 1),
            carbs=round(carbs, 1),
            fat=round(fat, 1),
            sugar=round(resolve_sugar(sugar, carbs, name), 1),
            added_sugar=round(added_sugar, 1),
            serving_size=serving_size,
            raw_text=f"Barcode {barcode} via {source}",
            confidence=confidence,
        )


@dataclass
class ConnectorResponse:
    """Standardized response from connector API calls."""

    data: Any
    status_code: int
    headers: dict[str, str]
    raw_response: dict[str, Any] | list[Any] | None = None

    @property
    def is_success(self) -> bool:
        """Check if response indicates success."""
        return 200 <= self.status_code < 300

    @property
    def is_not_found(self) -> bool:
        """Check if the requested resource does not exist."""
        return self.status_code == 404

    @property
    def is_rate_limited(self) -> bool:
        """Check if response indicates rate limiting."""
        return self.status_code == 429

    @property
    def retry_after(self) -> int | None:
        """Get retry-after seconds from headers, if present."""
        retry_after = self.headers.get("retry-after") or self.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                return None
        return None


class ConnectorError(Exception):
    """Base exception for connector errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class RateLimitError(ConnectorError):
    """Raised when API rate limit is exceeded."""

    def __init__(self, message: str, retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class FoodDataConnector(ABC):
    """Abstract base class for barcode food data providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return connector name for logging and identification."""
        pass

    @property
    def is_configured(self) -> bool:
        """Check if the connector has the credentials it needs."""
        return True

    @abstractmethod
    async def lookup_barcode(self, barcode: str) -> ParsedFoodBarcode | None:
        """
        Look up a packaged food by barcode.

        Args:
            barcode: EAN/UPC barcode digits.

        Returns:
            Parsed food data, or None if the provider has no usable record.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the connector can reach its API.

        Returns:
            True if healthy, False otherwise.
        """
        pass

    async def close(self) -> None:
        """Release any open resources."""
