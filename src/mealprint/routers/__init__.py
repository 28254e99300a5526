"""API routers for the mealprint application."""

from mealprint.routers.blueprints import router as blueprints_router
from mealprint.routers.foods import router as foods_router
from mealprint.routers.units import router as units_router

__all__ = [
    "blueprints_router",
    "foods_router",
    "units_router",
]
