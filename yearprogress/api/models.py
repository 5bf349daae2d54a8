"""HTTP API models."""

from datetime import datetime

from pydantic import BaseModel


class ModelOption(BaseModel):
    """A selectable phone model."""

    id: str
    name: str
    width: int
    height: int


class StyleOption(BaseModel):
    """A selectable wallpaper style."""

    id: str
    name: str
    description: str


class OptionsResponse(BaseModel):
    """Response for /api/options endpoint."""

    default_model: str
    default_style: str
    models: list[ModelOption]
    styles: list[StyleOption]


class StatusResponse(BaseModel):
    """Response for /status endpoint."""

    status: str = "running"
    version: str
    timestamp: datetime
