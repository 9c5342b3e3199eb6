import json
import logging
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.core.exceptions import GatewayError, InvalidIngredientsError, RecipeParseError
from app.core.text_utils import sanitize_ingredients
from app.schemas import Recipe, RecipeResponse

logger = logging.getLogger(__name__)

INVALID_FORMAT = "Invalid ingredients format"
INVALID_COUNT = (
    f"Ingredients must be between {settings.MIN_INGREDIENTS} "
    f"and {settings.MAX_INGREDIENTS} items"
)
NO_VALID_INGREDIENTS = "No valid ingredients provided"

RECIPE_SHAPE = (
    '{"recipes":[{"title":"Recipe Name","description":"Brief description",'
    '"cookTime":"X mins","servings":"X servings","ingredients":["item1","item2"],'
    '"instructions":["step1","step2"]}]}'
)

_recipes_adapter = TypeAdapter(list[Recipe])


class CompletionClient(Protocol):
    async def complete(self, prompt: str) -> str: ...


def validate_ingredients(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        raise InvalidIngredientsError(INVALID_FORMAT)

    ingredients = payload.get("ingredients")
    if not isinstance(ingredients, list):
        raise InvalidIngredientsError(INVALID_FORMAT)

    if not settings.MIN_INGREDIENTS <= len(ingredients) <= settings.MAX_INGREDIENTS:
        raise InvalidIngredientsError(INVALID_COUNT)

    sanitized = sanitize_ingredients(ingredients, settings.MAX_INGREDIENT_LENGTH)
    if not sanitized:
        raise InvalidIngredientsError(NO_VALID_INGREDIENTS)

    return sanitized


def build_prompt(ingredients: list[str]) -> str:
    return (
        f"Create 2-3 simple recipes using these ingredients: {', '.join(ingredients)}. "
        f"Return ONLY valid JSON with this structure: {RECIPE_SHAPE}. "
        "No markdown, just JSON."
    )


def parse_recipes(content: str) -> list[Recipe]:
    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as ex:
        raise RecipeParseError("Generated content is not valid JSON") from ex

    if not isinstance(data, dict) or not isinstance(data.get("recipes"), list):
        raise RecipeParseError("Generated content has no recipes array")

    try:
        return _recipes_adapter.validate_python(data["recipes"])
    except ValidationError as ex:
        raise RecipeParseError(
            f"Generated recipes do not match the expected shape ({ex.error_count()} errors)"
        ) from ex


class RecipeSuggestionHandler:
    """Turns an ingredient list into model-generated recipe suggestions.

    Input problems are reported to the caller as 400 responses. Anything
    that goes wrong past validation (network, timeout, malformed model
    output) yields an empty recipe list with status 200.
    """

    def __init__(self, gateway_client: CompletionClient) -> None:
        self.gateway_client = gateway_client

    async def suggest(self, ingredients: list[str]) -> list[Recipe]:
        try:
            content = await self.gateway_client.complete(build_prompt(ingredients))
            recipes = parse_recipes(content)
        except GatewayError as ex:
            logger.error(f"Recipe suggestion failed, returning no recipes: {ex}")
            return []

        logger.info(f"Gateway returned {len(recipes)} recipes")
        return recipes

    async def handle(self, body: bytes) -> tuple[int, dict[str, Any]]:
        try:
            payload = json.loads(body)
        except (ValueError, RecursionError):
            logger.error("Request body is not valid JSON, returning no recipes")
            return 200, RecipeResponse().model_dump(by_alias=True)

        try:
            ingredients = validate_ingredients(payload)
        except InvalidIngredientsError as ex:
            logger.warning(f"Rejected ingredients: {ex.message}")
            return 400, {"error": ex.message}

        logger.info(f"Requesting recipes for {len(ingredients)} ingredients")
        recipes = await self.suggest(ingredients)
        return 200, RecipeResponse(recipes=recipes).model_dump(by_alias=True)
