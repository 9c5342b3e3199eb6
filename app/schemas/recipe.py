from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Recipe(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: StrictStr
    description: StrictStr
    cook_time: StrictStr = Field(..., alias="cookTime")
    servings: StrictStr
    ingredients: list[StrictStr]
    # steps are in execution order
    instructions: list[StrictStr]
