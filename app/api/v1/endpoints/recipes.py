from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.core.gateway_client import GatewayClient
from app.schemas import ErrorResponse, RecipeRequest, RecipeResponse
from app.services.recipe_service import RecipeSuggestionHandler

router = APIRouter()


def get_gateway_client(request: Request) -> GatewayClient:
    return request.app.state.gateway_client


def get_suggestion_handler(
    gateway_client: GatewayClient = Depends(get_gateway_client),
) -> RecipeSuggestionHandler:
    return RecipeSuggestionHandler(gateway_client)


@router.options("/get-recipes", include_in_schema=False)
async def preflight_get_recipes() -> Response:
    return Response(status_code=200)


@router.post(
    "/get-recipes",
    response_model=RecipeResponse,
    responses={400: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": RecipeRequest.model_json_schema()}},
            "required": True,
        }
    },
)
async def get_recipes(
    *,
    request: Request,
    handler: RecipeSuggestionHandler = Depends(get_suggestion_handler),
) -> JSONResponse:
    status_code, content = await handler.handle(await request.body())
    return JSONResponse(status_code=status_code, content=content)
