"""Routes administrative and query commands to their handlers."""

from __future__ import annotations

from typing import Optional

from storychain import messages
from storychain.commands import PUBLIC_COMMANDS, CommandHandler, CommandResult, get_command_dispatch
from storychain.commands.context import CommandContext
from storychain.errors import PermissionDenied, PreconditionFailed
from storychain.utils.logging_config import GuildAdapter, get_logger

_logger = get_logger("storychain.commands")


class CommandDispatcher:
    def __init__(self, handlers: Optional[dict[str, CommandHandler]] = None):
        self.handlers = handlers if handlers is not None else get_command_dispatch()

    async def dispatch(self, command: str, ctx: CommandContext, options: Optional[dict] = None) -> CommandResult:
        ctx.command = command
        log = GuildAdapter(_logger, ctx.guild_id)

        handler = self.handlers.get(command)
        if handler is None:
            text = messages.UNKNOWN_COMMAND.format(command=command)
            await ctx.respond(text)
            return CommandResult(ok=False, message=text)

        try:
            if command not in PUBLIC_COMMANDS and not ctx.is_admin:
                raise PermissionDenied(f"user {ctx.user_id} is not an administrator")
            return await handler(ctx, options or {})
        except PreconditionFailed as exc:
            log.info("Command refused: %s", exc,
                     extra={"command": command, "user_id": ctx.user_id})
            await ctx.respond(exc.user_message)
            return CommandResult(ok=False, message=exc.user_message)
