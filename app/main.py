"""FastAPI application entry point."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from app import __version__
from app.api import elements, health, history
from app.config import settings

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(
    title="OSM Deep History",
    description="Version-by-version change tables for OpenStreetMap elements",
    version=__version__,
    debug=settings.debug,
)

app.mount("/history/static", StaticFiles(directory=STATIC_DIR), name="static")

app.include_router(health.router, tags=["health"])
app.include_router(elements.router, prefix="/api", tags=["elements"])
app.include_router(history.router, prefix="/history", tags=["history"])


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse("/history", status_code=302)
