"""discord.py implementations of the capability interfaces in :mod:`storychain.ports`."""

from __future__ import annotations

import discord

from storychain.bot.embeds import build_completion_embed
from storychain.errors import PlatformCallError
from storychain.ports import OutboundContent
from storychain.notifications import CompletionNotice


class DiscordChannel:
    def __init__(self, channel: discord.abc.Messageable, completion_color: int = 0x808080):
        self._channel = channel
        self._completion_color = completion_color

    @property
    def id(self) -> int:
        return self._channel.id

    async def send(self, content: OutboundContent) -> None:
        try:
            if isinstance(content, CompletionNotice):
                await self._channel.send(embed=build_completion_embed(content, self._completion_color))
            else:
                await self._channel.send(content)
        except discord.HTTPException as exc:
            raise PlatformCallError(f"send to channel {self.id} failed: {exc}") from exc


class DiscordMessage:
    def __init__(self, message: discord.Message):
        self._message = message

    @property
    def author_id(self) -> int:
        return self._message.author.id

    @property
    def channel_id(self) -> int:
        return self._message.channel.id

    @property
    def content(self) -> str:
        return self._message.content

    async def delete(self) -> None:
        try:
            await self._message.delete()
        except discord.HTTPException as exc:
            raise PlatformCallError(f"delete of message {self._message.id} failed: {exc}") from exc

    async def react(self, marker: str) -> None:
        try:
            await self._message.add_reaction(marker)
        except discord.HTTPException as exc:
            raise PlatformCallError(f"reaction on message {self._message.id} failed: {exc}") from exc

    async def reply(self, text: str) -> None:
        try:
            await self._message.reply(text)
        except discord.HTTPException as exc:
            raise PlatformCallError(f"reply to message {self._message.id} failed: {exc}") from exc


class DiscordChannelDirectory:
    """Resolves channel ids through the client cache, falling back to the API."""

    def __init__(self, client: discord.Client, completion_color: int = 0x808080):
        self._client = client
        self._completion_color = completion_color

    async def fetch_channel(self, channel_id: int) -> DiscordChannel:
        channel = self._client.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self._client.fetch_channel(channel_id)
            except discord.HTTPException as exc:
                raise PlatformCallError(f"fetch of channel {channel_id} failed: {exc}") from exc
        if not isinstance(channel, discord.abc.Messageable):
            raise PlatformCallError(f"channel {channel_id} does not accept messages")
        return DiscordChannel(channel, self._completion_color)
