"""Narrow capability interfaces the core needs from the messaging platform.

The Discord adapter in :mod:`storychain.bot` implements these; the tests
use in-memory fakes. Implementations raise
:class:`~storychain.errors.PlatformCallError` when the platform refuses a
call.
"""

from __future__ import annotations

from typing import Protocol, Union

from storychain.notifications import CompletionNotice

OutboundContent = Union[str, CompletionNotice]


class StoryChannel(Protocol):
    """A text channel stories can be posted to."""

    @property
    def id(self) -> int:
        ...

    async def send(self, content: OutboundContent) -> None:
        ...


class StoryMessage(Protocol):
    """An inbound chat message, as seen by the ingestion path."""

    @property
    def author_id(self) -> int:
        ...

    @property
    def channel_id(self) -> int:
        ...

    @property
    def content(self) -> str:
        ...

    async def delete(self) -> None:
        ...

    async def react(self, marker: str) -> None:
        ...

    async def reply(self, text: str) -> None:
        ...


class ChannelDirectory(Protocol):
    """Looks channels up by id."""

    async def fetch_channel(self, channel_id: int) -> StoryChannel:
        ...
