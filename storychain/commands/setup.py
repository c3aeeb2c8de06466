"""Handle the ``setup`` command — bind the story channel and open a story."""

from __future__ import annotations

from storychain import messages
from storychain.commands import CommandResult
from storychain.commands.context import CommandContext
from storychain.utils.logging_config import GuildAdapter, get_logger

_logger = get_logger("storychain.commands.setup")


async def handle_setup(ctx: CommandContext, options: dict) -> CommandResult:
    channel_id: int = options["channel_id"]
    async with ctx.registry.guard(ctx.guild_id):
        discarded = ctx.registry.bind_channel(ctx.guild_id, channel_id)

    log = GuildAdapter(_logger, ctx.guild_id)
    if discarded:
        log.warning("Rebinding dropped %d unarchived words", discarded,
                    extra={"channel_id": channel_id, "user_id": ctx.user_id})
    log.info("Story channel bound", extra={"channel_id": channel_id, "user_id": ctx.user_id})

    reply = messages.SETUP_CONFIRMATION.format(channel_id=channel_id)
    await ctx.respond(reply)
    await ctx.notifier.announce(channel_id, messages.SETUP_ANNOUNCEMENT)
    return CommandResult(ok=True, message=reply)
