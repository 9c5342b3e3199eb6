from typing import Any

from pydantic import BaseModel, Field


# Only describes the body for the OpenAPI schema; the endpoint validates the raw payload
class RecipeRequest(BaseModel):
    ingredients: list[Any] = Field(..., min_length=1, max_length=50)
