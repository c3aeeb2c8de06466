"""
Per-guild story state machine.

A guild is either disabled (no bound channel) or active: its bound channel
accepts single-word contributions, and a word whose last character is a
terminator (``.``, ``!`` or ``?``) completes the story. Completion archives
the story and immediately opens a fresh, empty one in the same channel.

Mutations run while holding the guild's registry guard and never await
inside it; notifications are sent afterwards from immutable snapshots, so
``completed_stories`` order always matches the order in which completions
were committed.
"""

from __future__ import annotations

import dataclasses
import enum
from datetime import datetime, timezone
from typing import Callable, Optional

from storychain.errors import EmptyStory, NoActiveStory
from storychain.models import CompletedStory, GuildConfig, StoryData, WordEntry
from storychain.notifications import StoryNotifier
from storychain.ports import StoryMessage
from storychain.registry import ConfigRegistry
from storychain.utils.logging_config import GuildAdapter, get_logger

_logger = get_logger("storychain.engine")

TERMINATORS = (".", "!", "?")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_terminator(word: str) -> bool:
    return word.endswith(TERMINATORS)


class IngestOutcome(enum.Enum):
    IGNORED = "ignored"
    REJECTED_EMPTY = "rejected_empty"
    REJECTED_MULTIPLE_WORDS = "rejected_multiple_words"
    ACCEPTED = "accepted"
    COMPLETED = "completed"


@dataclasses.dataclass(frozen=True)
class IngestResult:
    outcome: IngestOutcome
    word: Optional[str] = None
    completed: Optional[CompletedStory] = None


_IGNORED = IngestResult(IngestOutcome.IGNORED)


class StoryEngine:
    def __init__(
        self,
        registry: ConfigRegistry,
        notifier: StoryNotifier,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.registry = registry
        self.notifier = notifier
        self.clock = clock

    async def ingest(self, guild_id: int, message: StoryMessage) -> IngestResult:
        """Apply one chat message to the guild's story, then send the follow-ups."""
        async with self.registry.guard(guild_id):
            result = self._apply(guild_id, message)

        if result.outcome is IngestOutcome.IGNORED:
            return result
        if result.outcome is IngestOutcome.REJECTED_EMPTY:
            await self.notifier.discard(message)
        elif result.outcome is IngestOutcome.REJECTED_MULTIPLE_WORDS:
            await self.notifier.reject_multiple_words(message)
        else:
            await self.notifier.acknowledge(message)
            if result.completed is not None:
                await self.notifier.story_completed(result.completed)
        return result

    async def force_complete(self, guild_id: int) -> CompletedStory:
        """Archive the current story without waiting for a terminator word.

        Raises :class:`NoActiveStory` when the guild has no story and
        :class:`EmptyStory` when the story has no words yet.
        """
        async with self.registry.guard(guild_id):
            config = self.registry.get_or_create(guild_id)
            if config.current_story is None:
                raise NoActiveStory()
            if not config.current_story.words:
                raise EmptyStory()
            completed = self._complete(config)
        await self.notifier.story_completed(completed)
        return completed

    # ------------------------------------------------------------------
    # Synchronous state transitions (called with the guild guard held)
    # ------------------------------------------------------------------

    def _apply(self, guild_id: int, message: StoryMessage) -> IngestResult:
        config = self.registry.get_or_create(guild_id)
        story = config.current_story
        if config.story_channel_id is None or message.channel_id != config.story_channel_id:
            return _IGNORED
        if story is None or not story.is_active:
            return _IGNORED

        log = GuildAdapter(_logger, guild_id)
        tokens = message.content.split()
        if not tokens:
            log.info("Rejected empty message", extra={"user_id": message.author_id,
                                                      "event_type": "rejected_empty"})
            return IngestResult(IngestOutcome.REJECTED_EMPTY)
        if len(tokens) > 1:
            log.info("Rejected multi-word message", extra={"user_id": message.author_id,
                                                           "event_type": "rejected_multiple_words"})
            return IngestResult(IngestOutcome.REJECTED_MULTIPLE_WORDS)

        word = tokens[0]
        story.words.append(WordEntry(word=word, user_id=message.author_id, timestamp=self.clock()))
        log.debug("Accepted word #%d", story.word_count, extra={"user_id": message.author_id})

        if is_terminator(word):
            return IngestResult(IngestOutcome.COMPLETED, word=word, completed=self._complete(config))
        return IngestResult(IngestOutcome.ACCEPTED, word=word)

    def _complete(self, config: GuildConfig) -> CompletedStory:
        story = config.current_story
        completed = CompletedStory.from_story(story, completed_at=self.clock())
        config.completed_stories.append(completed)
        config.current_story = StoryData(channel_id=config.story_channel_id)
        GuildAdapter(_logger, config.guild_id).info(
            "Story completed (%d words, %d participants)",
            completed.word_count, len(completed.participants),
            extra={"channel_id": completed.channel_id, "event_type": "story_completed"},
        )
        return completed
