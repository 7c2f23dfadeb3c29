import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory_api.api.errors import request_validation_handler
from inventory_api.api.health import router as health_router
from inventory_api.api.routes_catalogue import router as catalogue_router
from inventory_api.config import settings
from inventory_api.db import init_db
from inventory_api.utils.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    configure_logging()
    init_db(reset=settings.RESET_DB, seed=settings.SEED_SAMPLE_DATA)
    logger.info("Inventory API started (database=%s)", settings.DATABASE_URL.split("://", 1)[0])
    yield


app = FastAPI(title="Product Inventory API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # last resort for anything a route did not translate itself
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])


def run():
    import uvicorn

    uvicorn.run("inventory_api.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
