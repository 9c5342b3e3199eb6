import asyncio
import sys
import os

import httpx

sys.path.append(os.getcwd())

from app.core.config import settings

BASE_URL = os.getenv("RECIPES_BASE_URL", f"http://localhost:{settings.APP_PORT}")
ENDPOINT = "/api/v1/get-recipes"


def _print_recipe(recipe: dict):
    print("-" * 56)
    print(f"{recipe['title']} ({recipe['cookTime']}, {recipe['servings']})")
    print(recipe["description"])
    print(" Ingredients: " + ", ".join(recipe["ingredients"]))
    for number, step in enumerate(recipe["instructions"], start=1):
        print(f" {number}. {step}")


async def suggest(ingredients: list[str]) -> int:
    print(f"Requesting recipes for: {', '.join(ingredients)}")
    timeout = settings.AI_GATEWAY_TIMEOUT_SECONDS + 5
    async with httpx.AsyncClient(base_url=BASE_URL, timeout=timeout) as client:
        response = await client.post(ENDPOINT, json={"ingredients": ingredients})

    data = response.json()
    if response.status_code != 200:
        print(f"Request rejected ({response.status_code}): {data['error']}")
        return 1

    if not data["recipes"]:
        print("No recipes found. Try adding more ingredients!")
        return 0

    for recipe in data["recipes"]:
        _print_recipe(recipe)
    print(f"Received {len(data['recipes'])} recipes.")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(f"Usage: python {sys.argv[0]} INGREDIENT [INGREDIENT ...]")
        sys.exit(2)
    sys.exit(asyncio.run(suggest(sys.argv[1:])))
