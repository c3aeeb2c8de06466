"""Read-only guild and archive endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from storychain.models import GuildConfig
from storychain.registry import ConfigRegistry
from storychain.schemas.api import (
    CompletedStoryResponse,
    CurrentStoryResponse,
    GuildResponse,
    HealthResponse,
)

router = APIRouter()


def get_registry(request: Request) -> ConfigRegistry:
    return request.app.state.registry


def _require_guild(registry: ConfigRegistry, guild_id: int) -> GuildConfig:
    # Lookups never create configs; only chat traffic and commands do
    config = registry.get(guild_id)
    if config is None:
        raise HTTPException(status_code=404, detail="Guild not found")
    return config


@router.get("/health", response_model=HealthResponse)
async def health(registry: ConfigRegistry = Depends(get_registry)):
    return HealthResponse(guilds=len(registry))


@router.get("/guilds/{guild_id}", response_model=GuildResponse)
async def get_guild(guild_id: int, registry: ConfigRegistry = Depends(get_registry)):
    config = _require_guild(registry, guild_id)
    story = config.current_story
    current = None
    if story is not None:
        current = CurrentStoryResponse(
            channel_id=story.channel_id,
            is_active=story.is_active,
            word_count=story.word_count,
            participant_count=len(story.participants),
            text=story.text(),
        )
    return GuildResponse(
        guild_id=config.guild_id,
        story_channel_id=config.story_channel_id,
        current_story=current,
        completed_count=len(config.completed_stories),
    )


@router.get("/guilds/{guild_id}/stories", response_model=List[CompletedStoryResponse])
async def list_completed_stories(guild_id: int, registry: ConfigRegistry = Depends(get_registry)):
    config = _require_guild(registry, guild_id)
    return [
        CompletedStoryResponse(
            channel_id=s.channel_id,
            content=s.content,
            completed_at=s.completed_at,
            word_count=s.word_count,
            participants=sorted(s.participants),
        )
        for s in config.completed_stories
    ]
