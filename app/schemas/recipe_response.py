from pydantic import BaseModel, Field

from .recipe import Recipe


class RecipeResponse(BaseModel):
    recipes: list[Recipe] = Field(default_factory=list)
