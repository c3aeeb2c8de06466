"""Response models for the inspection API."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    guilds: int = 0


class CurrentStoryResponse(BaseModel):
    channel_id: int
    is_active: bool
    word_count: int
    participant_count: int
    text: str


class GuildResponse(BaseModel):
    guild_id: int
    story_channel_id: Optional[int] = None
    current_story: Optional[CurrentStoryResponse] = None
    completed_count: int = 0


class CompletedStoryResponse(BaseModel):
    channel_id: int
    content: str
    completed_at: datetime
    word_count: int
    participants: List[int] = Field(default_factory=list)
