"""Slash-command declarations; each one forwards to the CommandDispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands

from storychain.commands.context import CommandContext
from storychain.utils.logging_config import get_logger

if TYPE_CHECKING:
    from storychain.bot.client import StoryBot

_logger = get_logger("storychain.bot.commands")


def build_context(bot: "StoryBot", interaction: discord.Interaction) -> CommandContext:
    async def respond(text: str) -> None:
        await interaction.response.send_message(text, ephemeral=True)

    return CommandContext(
        guild_id=interaction.guild_id,
        user_id=interaction.user.id,
        is_admin=interaction.permissions.administrator,
        respond=respond,
        registry=bot.registry,
        engine=bot.engine,
        notifier=bot.notifier,
    )


async def _run(bot: "StoryBot", interaction: discord.Interaction, command: str,
               options: Optional[dict] = None) -> None:
    ctx = build_context(bot, interaction)
    result = await bot.dispatcher.dispatch(command, ctx, options)
    _logger.debug("Command finished (ok=%s)", result.ok,
                  extra={"guild_id": ctx.guild_id, "command": command, "user_id": ctx.user_id})


def register_commands(tree: app_commands.CommandTree, bot: "StoryBot") -> None:
    """Declare the five story commands on *tree*."""

    @tree.command(name="story-setup", description="Choose the channel for collaborative stories")
    @app_commands.describe(channel="The channel stories are written in")
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def story_setup(interaction: discord.Interaction, channel: discord.TextChannel):
        await _run(bot, interaction, "setup", {"channel_id": channel.id})

    @tree.command(name="story-end", description="End the current story")
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def story_end(interaction: discord.Interaction):
        await _run(bot, interaction, "end")

    @tree.command(name="story-reset", description="Reset the current story without saving it")
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def story_reset(interaction: discord.Interaction):
        await _run(bot, interaction, "reset")

    @tree.command(name="story-disable", description="Disable the story channel")
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def story_disable(interaction: discord.Interaction):
        await _run(bot, interaction, "disable")

    @tree.command(name="story-status", description="Show the status of the current story")
    @app_commands.guild_only()
    async def story_status(interaction: discord.Interaction):
        await _run(bot, interaction, "status")
