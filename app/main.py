import sys
import logging
from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from pydantic import BaseModel

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.gateway_client import create_gateway_client

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(), handlers=[logging.StreamHandler(sys.stdout)]
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.gateway_client = create_gateway_client()
    logger.info(f"Gateway client ready (model: {settings.AI_MODEL}).")
    yield
    await app.state.gateway_client.aclose()


class RootResponse(BaseModel):
    status: str
    project_name: str
    version: str
    documentation_url: str


app = FastAPI(title="Pantry Recipe Suggestions", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(settings.CORS_HEADERS)
    return response


app.include_router(api_router, prefix="/api/v1")


@app.get("/", response_model=RootResponse, tags=["Root"])
def read_root():
    return {
        "status": "ok",
        "project_name": app.title,
        "version": app.version,
        "documentation_url": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.APP_PORT)
