"""API routes for quantity scaling, unit conversion and sugar estimates."""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel, Field

from mealprint.config import get_settings
from mealprint.logging_config import get_logger
from mealprint.normalize.nutrition import estimate_sugar
from mealprint.normalize.units import (
    UnitSystem,
    convert_to_imperial,
    render_quantity,
    scale_embedded_quantities,
    scale_ingredient_line,
    scale_quantity,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["units"])


def default_unit_system() -> UnitSystem:
    """Unit system used when a request does not name one."""
    return UnitSystem(get_settings().default_unit_system)


# =============================================================================
# Request/Response Schemas
# =============================================================================


class ScaleRequest(BaseModel):
    """Request to rescale a quantity string."""

    quantity: str
    factor: float = Field(gt=0, description="Requested servings / authored servings")
    mode: Literal["quantity", "ingredient", "embedded"] = Field(
        default="quantity",
        description="quantity: first number+unit anywhere; ingredient: leading number; "
        "embedded: every number+unit",
    )


class ConvertRequest(BaseModel):
    """Request to render a quantity string in a unit system."""

    quantity: str
    unit_system: UnitSystem = UnitSystem.IMPERIAL


class QuantityResponse(BaseModel):
    """Original and transformed quantity string."""

    original: str
    result: str


class RenderRequest(BaseModel):
    """Request to scale and convert several quantity strings at once."""

    quantities: list[str] = Field(default_factory=list)
    factor: float = Field(default=1.0, gt=0)
    unit_system: UnitSystem = Field(default_factory=default_unit_system)


class RenderResponse(BaseModel):
    """Rendered quantity strings in request order."""

    results: list[str]


class SugarEstimateRequest(BaseModel):
    """Request to fill in a sugar value."""

    carbs: float = Field(ge=0)
    food_name: str = ""
    sugar: float | None = Field(default=None, ge=0, description="Reported sugar, if any")


class SugarEstimateResponse(BaseModel):
    """Sugar grams and whether the value was estimated."""

    sugar: float
    estimated: bool


_SCALERS = {
    "quantity": scale_quantity,
    "ingredient": scale_ingredient_line,
    "embedded": scale_embedded_quantities,
}


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/units/scale", response_model=QuantityResponse)
async def scale(request: ScaleRequest) -> QuantityResponse:
    """Rescale a quantity string by a serving factor."""
    result = _SCALERS[request.mode](request.quantity, request.factor)
    return QuantityResponse(original=request.quantity, result=result)


@router.post("/units/convert", response_model=QuantityResponse)
async def convert(request: ConvertRequest) -> QuantityResponse:
    """Convert a metric quantity string to the requested unit system."""
    result = request.quantity
    if request.unit_system is UnitSystem.IMPERIAL:
        result = convert_to_imperial(request.quantity)
    return QuantityResponse(original=request.quantity, result=result)


@router.post("/units/render", response_model=RenderResponse)
async def render(request: RenderRequest) -> RenderResponse:
    """Scale and convert a batch of quantity strings."""
    results = [render_quantity(q, request.factor, request.unit_system) for q in request.quantities]
    logger.debug(f"Rendered {len(results)} quantities")
    return RenderResponse(results=results)


@router.post("/nutrition/estimate-sugar", response_model=SugarEstimateResponse)
async def sugar_estimate(request: SugarEstimateRequest) -> SugarEstimateResponse:
    """Return reported sugar, or estimate it from carbs and the food name."""
    if request.sugar is not None and request.sugar > 0:
        return SugarEstimateResponse(sugar=request.sugar, estimated=False)
    sugar = round(estimate_sugar(request.carbs, request.food_name), 1)
    return SugarEstimateResponse(sugar=sugar, estimated=request.carbs > 0)
