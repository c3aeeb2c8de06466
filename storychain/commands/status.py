"""Handle the ``status`` command — report on the story in progress."""

from __future__ import annotations

from storychain import messages
from storychain.commands import CommandResult
from storychain.commands.context import CommandContext


async def handle_status(ctx: CommandContext, options: dict) -> CommandResult:
    story = ctx.registry.get_or_create(ctx.guild_id).current_story
    if story is None or not story.words:
        report = messages.STATUS_EMPTY
    else:
        report = messages.STATUS_REPORT.format(
            words=story.word_count,
            participants=len(story.participants),
            text=story.text(),
        )
    await ctx.respond(report)
    return CommandResult(ok=True, message=report)
