"""Handle the ``end`` command — archive the current story right away."""

from __future__ import annotations

from storychain import messages
from storychain.commands import CommandResult
from storychain.commands.context import CommandContext


async def handle_end(ctx: CommandContext, options: dict) -> CommandResult:
    await ctx.engine.force_complete(ctx.guild_id)
    await ctx.respond(messages.END_CONFIRMATION)
    return CommandResult(ok=True, message=messages.END_CONFIRMATION)
