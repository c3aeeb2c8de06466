"""Outbound side effects of the story game.

Everything here runs after the state mutation it reports on has been
committed, so a failing platform call loses visibility but never data.
Best-effort calls (react, delete) are logged at WARNING and dropped;
primary notifications are logged with a traceback and the caller carries
on.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from storychain import messages
from storychain.errors import PlatformCallError
from storychain.models import CompletedStory
from storychain.utils.logging_config import get_logger

if TYPE_CHECKING:
    from storychain.ports import ChannelDirectory, StoryChannel, StoryMessage

logger = get_logger("storychain.notifications")


@dataclasses.dataclass(frozen=True)
class CompletionNotice:
    """Structured announcement of a completed story; rendered by the platform adapter."""
    content: str
    participant_count: int
    word_count: int
    completed_at: datetime

    @classmethod
    def from_completed(cls, story: CompletedStory) -> "CompletionNotice":
        return cls(
            content=story.content,
            participant_count=len(story.participants),
            word_count=story.word_count,
            completed_at=story.completed_at,
        )


class StoryNotifier:
    def __init__(self, channels: "ChannelDirectory", acceptance_marker: str = "✅"):
        self.channels = channels
        self.acceptance_marker = acceptance_marker

    # -- best-effort --------------------------------------------------------

    async def acknowledge(self, message: "StoryMessage") -> None:
        try:
            await message.react(self.acceptance_marker)
        except PlatformCallError as exc:
            logger.warning("Could not react to accepted word: %s", exc,
                           extra={"channel_id": message.channel_id, "user_id": message.author_id})

    async def discard(self, message: "StoryMessage") -> None:
        try:
            await message.delete()
        except PlatformCallError as exc:
            logger.warning("Could not delete rejected message: %s", exc,
                           extra={"channel_id": message.channel_id, "user_id": message.author_id})

    # -- rejections ---------------------------------------------------------

    async def reject_multiple_words(self, message: "StoryMessage") -> None:
        try:
            await message.reply(messages.SINGLE_WORD_ONLY)
        except PlatformCallError:
            logger.exception("Could not send single-word notice",
                             extra={"channel_id": message.channel_id, "user_id": message.author_id})
        await self.discard(message)

    # -- primary notifications ---------------------------------------------

    async def story_completed(self, story: CompletedStory) -> None:
        channel = await self._resolve(story.channel_id)
        if channel is None:
            return
        try:
            await channel.send(CompletionNotice.from_completed(story))
            await channel.send(messages.NEW_STORY_ANNOUNCEMENT)
        except PlatformCallError:
            logger.exception("Could not announce completed story",
                             extra={"channel_id": story.channel_id})

    async def announce(self, channel_id: int, text: str) -> bool:
        """Post *text* in a channel. Returns False if the platform refused."""
        channel = await self._resolve(channel_id)
        if channel is None:
            return False
        try:
            await channel.send(text)
        except PlatformCallError:
            logger.exception("Could not post announcement", extra={"channel_id": channel_id})
            return False
        return True

    async def _resolve(self, channel_id: int) -> Optional["StoryChannel"]:
        try:
            return await self.channels.fetch_channel(channel_id)
        except PlatformCallError:
            logger.exception("Could not fetch channel", extra={"channel_id": channel_id})
            return None
