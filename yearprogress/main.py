"""Main FastAPI application."""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import Response

from .api.models import ModelOption, OptionsResponse, StatusResponse, StyleOption
from .config import settings
from .render.fonts import FontLoader
from .render.renderer import WallpaperRenderer, sprite_png
from .wallpaper.layout import SPRITE_NAMES, build_wallpaper
from .wallpaper.phones import DEFAULT_MODEL, PHONE_PROFILES
from .wallpaper.styles import DEFAULT_STYLE, STYLE_RECIPES, resolve_style

VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Year Progress Wallpaper",
    description="Phone wallpapers that show how much of the year has passed",
    version=VERSION,
)

# Initialize components
renderer = WallpaperRenderer(settings.output_dir)
font_loader = FontLoader.from_settings(settings)


def get_base_url(request: Request) -> str:
    """Get base URL for sprite references."""
    return f"{request.url.scheme}://{request.headers.get('host', 'localhost')}"


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Year Progress Wallpaper",
        "version": VERSION,
        "endpoints": {
            "wallpaper": "/today",
            "options": "/api/options",
            "assets": "/assets/{name}.png",
            "status": "/status",
        },
    }


@app.get("/status", response_model=StatusResponse)
async def status():
    """Server status endpoint."""
    return StatusResponse(version=VERSION, timestamp=datetime.utcnow())


@app.get("/api/options", response_model=OptionsResponse)
async def options():
    """Phone models and styles available to /today."""
    return OptionsResponse(
        default_model=DEFAULT_MODEL,
        default_style=DEFAULT_STYLE,
        models=[
            ModelOption(id=p.id, name=p.name, width=p.width, height=p.height)
            for p in PHONE_PROFILES.values()
        ],
        styles=[
            StyleOption(id=r.id, name=r.name, description=r.description)
            for r in STYLE_RECIPES.values()
        ],
    )


@app.get("/today")
async def today(
    request: Request,
    model: str = Query(DEFAULT_MODEL, description="Phone model id"),
    style: str = Query(DEFAULT_STYLE, description="Wallpaper style id"),
    text: Optional[str] = Query(None, description="Custom text for the ink style"),
    simulate: Optional[str] = Query(None, description="Progress override in [0, 1]"),
):
    """
    Render today's wallpaper as PNG.

    Unknown models and styles fall back to defaults, so every request
    gets an image.
    """
    # The font download runs in a worker thread while the layout is built
    recipe = resolve_style(style)
    font_task = font_loader.start((recipe.font,) if recipe.font else ())

    wallpaper = build_wallpaper(
        model=model,
        style=style,
        text=text,
        simulate=simulate,
        origin=get_base_url(request),
    )

    fonts = await font_task
    image = await asyncio.to_thread(renderer.to_png, wallpaper.canvas, fonts)

    logger.info(f"Serving {wallpaper.filename} ({len(image)} bytes)")

    return Response(
        content=image,
        media_type="image/png",
        headers={
            "Cache-Control": settings.cache_control,
            "Content-Disposition": f'inline; filename="{wallpaper.filename}"',
        },
    )


@app.get("/assets/{name}.png")
async def asset(name: str, size: int = Query(128, ge=8, le=512)):
    """Flower sprite images referenced by the flowers style."""
    if name not in SPRITE_NAMES:
        raise HTTPException(status_code=404, detail=f"Unknown sprite: {name}")

    return Response(
        content=sprite_png(name, size),
        media_type="image/png",
        headers={"Cache-Control": settings.cache_control},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
