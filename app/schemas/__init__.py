from .recipe import Recipe
from .recipe_request import RecipeRequest
from .recipe_response import RecipeResponse
from .error import ErrorResponse

__all__ = [
    "Recipe",
    "RecipeRequest",
    "RecipeResponse",
    "ErrorResponse"
]
