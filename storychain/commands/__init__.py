"""Command dispatch table and result type."""

from __future__ import annotations

import dataclasses
from typing import Awaitable, Callable

from storychain.commands.context import CommandContext


@dataclasses.dataclass
class CommandResult:
    """Returned by each command handler.

    ``message`` is the text the invoking member was shown.
    """
    ok: bool
    message: str


# Type alias for command handler signatures
CommandHandler = Callable[[CommandContext, dict], Awaitable[CommandResult]]

# Commands anyone may run; everything else needs administrator rights.
PUBLIC_COMMANDS = frozenset({"status"})


def get_command_dispatch() -> dict[str, CommandHandler]:
    """Build and return the command → handler dispatch table.

    Imports are deferred to avoid circular-import issues.
    """
    from storychain.commands.setup import handle_setup
    from storychain.commands.end import handle_end
    from storychain.commands.reset import handle_reset
    from storychain.commands.disable import handle_disable
    from storychain.commands.status import handle_status

    return {
        "setup": handle_setup,
        "end": handle_end,
        "reset": handle_reset,
        "disable": handle_disable,
        "status": handle_status,
    }
