"""API routes for rendering weekly blueprints."""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from mealprint.config import get_settings
from mealprint.logging_config import LoggingContext, get_logger
from mealprint.plan.blueprint import BlueprintRenderer, convert_blueprint_to_imperial

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/blueprints", tags=["blueprints"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class BlueprintRenderRequest(BaseModel):
    """Request to render a blueprint for a serving count and unit preference."""

    blueprint: dict[str, Any]
    blueprint_id: str | None = None
    selected_servings: int | None = Field(default=None, ge=1, le=50)
    use_imperial: bool = Field(
        default_factory=lambda: get_settings().default_unit_system == "imperial"
    )


class ShoppingItemSchema(BaseModel):
    """Single rendered shopping list item."""

    item: str
    quantity: str = ""
    bought: bool = False
    note: str | None = None


class ShoppingListResponse(BaseModel):
    """Rendered shopping list grouped by category."""

    categories: dict[str, list[ShoppingItemSchema]]
    total_items: int
    bought_items: int


class RenderedMealSchema(BaseModel):
    """Meal with rendered ingredient lines."""

    meal_type: str
    name: str
    ingredients: list[str] = Field(default_factory=list)


class RenderedDaySchema(BaseModel):
    """One rendered blueprint day."""

    day: str
    meals: list[RenderedMealSchema] = Field(default_factory=list)


class MealsResponse(BaseModel):
    """Rendered meals for the whole week."""

    days: list[RenderedDaySchema]


class BlueprintConvertRequest(BaseModel):
    """Request to convert a metric blueprint to imperial."""

    blueprint: dict[str, Any]


class BlueprintConvertResponse(BaseModel):
    """Converted blueprint document."""

    blueprint: dict[str, Any]
    converted: bool


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/shopping-list", response_model=ShoppingListResponse)
async def render_shopping_list(request: BlueprintRenderRequest) -> ShoppingListResponse:
    """Render the shopping list scaled to the selected servings."""
    renderer = BlueprintRenderer(request.selected_servings, request.use_imperial)
    with LoggingContext(blueprint_id=request.blueprint_id):
        shopping_list = renderer.render_shopping_list(request.blueprint)
        logger.info(
            f"Rendered shopping list with {shopping_list.total_items} items "
            f"({shopping_list.bought_items} bought)"
        )

    return ShoppingListResponse(
        categories={
            category: [ShoppingItemSchema(**asdict(item)) for item in items]
            for category, items in shopping_list.categories.items()
        },
        total_items=shopping_list.total_items,
        bought_items=shopping_list.bought_items,
    )


@router.post("/meals", response_model=MealsResponse)
async def render_meals(request: BlueprintRenderRequest) -> MealsResponse:
    """Render every meal's ingredient lines scaled to the selected servings."""
    renderer = BlueprintRenderer(request.selected_servings, request.use_imperial)
    with LoggingContext(blueprint_id=request.blueprint_id):
        days = renderer.render_meals(request.blueprint)
        logger.info(f"Rendered meals for {len(days)} days")

    return MealsResponse(days=[RenderedDaySchema(**asdict(day)) for day in days])


@router.post("/convert", response_model=BlueprintConvertResponse)
async def convert_blueprint(request: BlueprintConvertRequest) -> BlueprintConvertResponse:
    """Convert all metric quantities of a blueprint to imperial."""
    already_imperial = request.blueprint.get("useImperial") is True
    converted = convert_blueprint_to_imperial(request.blueprint)
    return BlueprintConvertResponse(blueprint=converted, converted=not already_imperial)
