"""FastAPI application factory for the read-only inspection API."""

from __future__ import annotations

from fastapi import FastAPI

from storychain import __version__
from storychain.registry import ConfigRegistry
from storychain.routers import guilds


def create_app(registry: ConfigRegistry) -> FastAPI:
    app = FastAPI(title="StoryChain", version=__version__)
    app.state.registry = registry
    app.include_router(guilds.router)
    return app
