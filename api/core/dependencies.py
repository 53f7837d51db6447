"""
FastAPI dependencies exposing process-wide components from `app.state`.

`api/main.py` fills `app.state` during startup; tests set the same
attributes directly.
"""

from __future__ import annotations

from fastapi import Request

from .config import Settings
from .places import PlacesClient
from .store import RecordStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_places(request: Request) -> PlacesClient:
    return request.app.state.places
