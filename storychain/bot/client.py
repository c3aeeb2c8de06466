"""The Discord client hosting the story game."""

from __future__ import annotations

import discord
from discord import app_commands

from storychain.bot.adapters import DiscordChannelDirectory, DiscordMessage
from storychain.bot.slash_commands import register_commands
from storychain.commands.dispatcher import CommandDispatcher
from storychain.config import Settings
from storychain.engine import StoryEngine
from storychain.notifications import StoryNotifier
from storychain.registry import ConfigRegistry
from storychain.utils.logging_config import get_logger

_logger = get_logger("storychain.bot")


class StoryBot(discord.Client):
    def __init__(self, registry: ConfigRegistry, settings: Settings):
        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True
        super().__init__(intents=intents)

        self.settings = settings
        self.registry = registry
        self.notifier = StoryNotifier(
            DiscordChannelDirectory(self, settings.completion_color),
            acceptance_marker=settings.acceptance_marker,
        )
        self.engine = StoryEngine(registry, self.notifier)
        self.dispatcher = CommandDispatcher()
        self.tree = app_commands.CommandTree(self)
        register_commands(self.tree, self)

    async def setup_hook(self) -> None:
        if not self.settings.sync_commands:
            return
        try:
            synced = await self.tree.sync()
            _logger.info("Registered %d slash commands", len(synced))
        except discord.HTTPException:
            _logger.exception("Slash command registration failed")

    async def on_ready(self) -> None:
        _logger.info("Connected as %s", self.user, extra={"event_type": "ready"})

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.guild is None:
            return
        await self.engine.ingest(message.guild.id, DiscordMessage(message))
