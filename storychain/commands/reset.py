"""Handle the ``reset`` command — drop the current story's words without archiving."""

from __future__ import annotations

from storychain import messages
from storychain.commands import CommandResult
from storychain.commands.context import CommandContext
from storychain.utils.logging_config import GuildAdapter, get_logger

_logger = get_logger("storychain.commands.reset")


async def handle_reset(ctx: CommandContext, options: dict) -> CommandResult:
    async with ctx.registry.guard(ctx.guild_id):
        cleared = ctx.registry.reset_words(ctx.guild_id)
        channel_id = ctx.registry.get_or_create(ctx.guild_id).story_channel_id

    GuildAdapter(_logger, ctx.guild_id).info(
        "Story reset, %d words cleared", cleared, extra={"user_id": ctx.user_id})
    await ctx.respond(messages.RESET_CONFIRMATION)
    await ctx.notifier.announce(channel_id, messages.RESET_ANNOUNCEMENT)
    return CommandResult(ok=True, message=messages.RESET_CONFIRMATION)
