"""In-memory game state: one GuildConfig per guild, owned by the ConfigRegistry."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import List, Optional


@dataclasses.dataclass(frozen=True)
class WordEntry:
    word: str
    user_id: int
    timestamp: datetime


@dataclasses.dataclass
class StoryData:
    """The story currently being built in a guild's bound channel.

    ``words`` keeps submission order and is only ever appended to or
    cleared in place.
    """
    channel_id: int
    words: List[WordEntry] = dataclasses.field(default_factory=list)
    is_active: bool = True

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def participants(self) -> frozenset[int]:
        return frozenset(entry.user_id for entry in self.words)

    def text(self) -> str:
        return " ".join(entry.word for entry in self.words)


@dataclasses.dataclass(frozen=True)
class CompletedStory:
    """Archived snapshot of a story, taken at the moment it completed."""
    channel_id: int
    content: str
    completed_at: datetime
    participants: frozenset[int]
    word_count: int

    @classmethod
    def from_story(cls, story: StoryData, completed_at: datetime) -> "CompletedStory":
        return cls(
            channel_id=story.channel_id,
            content=story.text(),
            completed_at=completed_at,
            participants=story.participants,
            word_count=story.word_count,
        )


@dataclasses.dataclass
class GuildConfig:
    """Per-guild configuration.

    ``story_channel_id is None`` exactly when ``current_story is None``;
    when both are set, ``current_story.channel_id == story_channel_id``.
    ``completed_stories`` is append-only, in completion order.
    """
    guild_id: int
    story_channel_id: Optional[int] = None
    current_story: Optional[StoryData] = None
    completed_stories: List[CompletedStory] = dataclasses.field(default_factory=list)

    @property
    def is_enabled(self) -> bool:
        return self.story_channel_id is not None
