import json
import re
from typing import Any, Iterable

UNSAFE_CHARACTERS = re.compile(r"[<>{}]")


def coerce_to_text(value: Any) -> str:
    """
    Turn an arbitrary JSON value into text.
    Strings pass through, everything else is JSON-encoded
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def sanitize_ingredient(value: Any, max_length: int) -> str:
    """
    Coerce, truncate, then strip characters that could break out of the prompt
    """
    text = coerce_to_text(value)[:max_length]
    return UNSAFE_CHARACTERS.sub("", text)


def sanitize_ingredients(values: Iterable[Any], max_length: int) -> list[str]:
    sanitized = (sanitize_ingredient(value, max_length) for value in values)
    return [item for item in sanitized if item.strip()]
