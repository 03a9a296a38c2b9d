"""Main FastAPI application for CarSearch Pro."""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from carsearch.api import searches
from carsearch.core.config import settings
from carsearch.core.logging_config import configure_logging
from carsearch.core.services import ensure_database_ready


configure_logging(debug=settings.DEBUG)


@asynccontextmanager
async def _lifespan(_: FastAPI):
    ensure_database_ready()
    yield


app = FastAPI(title="CarSearch Pro API", version="1.0.0", lifespan=_lifespan)

app.include_router(searches.router, prefix="/searches", tags=["searches"])
