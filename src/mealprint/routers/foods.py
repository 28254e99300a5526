"""API routes for barcode food lookups."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from mealprint.ingest.connectors.base import ConnectorError, FoodDataConnector
from mealprint.ingest.lookup import FoodLookupService
from mealprint.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/foods", tags=["foods"])


class FoodBarcodeResponse(BaseModel):
    """Nutrition facts for a scanned barcode."""

    barcode: str
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    sugar: float
    added_sugar: float
    serving_size: str | None = None
    raw_text: str
    confidence: float

    class Config:
        from_attributes = True


async def get_food_connector() -> AsyncIterator[FoodDataConnector]:
    """Provide the multi-provider food lookup for the request."""
    async with FoodLookupService() as service:
        yield service


@router.get("/barcode/{barcode}", response_model=FoodBarcodeResponse)
async def lookup_barcode(
    barcode: str,
    connector: Annotated[FoodDataConnector, Depends(get_food_connector)],
) -> FoodBarcodeResponse:
    """Look up nutrition facts for a packaged food by barcode."""
    try:
        food = await connector.lookup_barcode(barcode)
    except ConnectorError as e:
        logger.error(f"Food lookup via {connector.name} failed for {barcode}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Food lookup failed: {e}",
        )

    if food is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No nutrition data found for barcode {barcode}",
        )

    return FoodBarcodeResponse.model_validate(food)
