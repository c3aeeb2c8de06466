"""Handle the ``disable`` command — unbind the story channel."""

from __future__ import annotations

from storychain import messages
from storychain.commands import CommandResult
from storychain.commands.context import CommandContext
from storychain.utils.logging_config import GuildAdapter, get_logger

_logger = get_logger("storychain.commands.disable")


async def handle_disable(ctx: CommandContext, options: dict) -> CommandResult:
    async with ctx.registry.guard(ctx.guild_id):
        channel_id = ctx.registry.disable(ctx.guild_id)

    GuildAdapter(_logger, ctx.guild_id).info(
        "Story channel disabled", extra={"channel_id": channel_id, "user_id": ctx.user_id})
    await ctx.respond(messages.DISABLE_CONFIRMATION)
    await ctx.notifier.announce(channel_id, messages.DISABLE_ANNOUNCEMENT)
    return CommandResult(ok=True, message=messages.DISABLE_CONFIRMATION)
