class InvalidIngredientsError(ValueError):
    """Raised when the request body does not carry a usable ingredient list.

    The message is returned to the caller verbatim.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GatewayError(Exception):
    """The language-model gateway could not produce a usable reply."""


class RecipeParseError(GatewayError):
    """The generated content is not JSON or does not have the recipe shape."""
