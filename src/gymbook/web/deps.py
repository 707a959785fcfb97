"""Request dependencies."""

from fastapi import Request

from ..calendar.selection import DateSelectionTracker
from ..config import Settings
from ..storage.images import ImageLoader, ImageStore
from ..store import FitnessStore


def get_store(request: Request) -> FitnessStore:
    """Store loaded at startup."""
    return request.app.state.store


def get_images(request: Request) -> ImageStore:
    return request.app.state.images


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_loader(request: Request) -> ImageLoader:
    """Background photo loader shared by all requests."""
    return request.app.state.loader


def get_tracker(request: Request) -> DateSelectionTracker:
    """Calendar tap state shared by all requests."""
    return request.app.state.tracker
