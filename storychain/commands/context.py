"""Per-invocation shared state for command handlers."""

from __future__ import annotations

import dataclasses
from typing import Awaitable, Callable

from storychain.engine import StoryEngine
from storychain.notifications import StoryNotifier
from storychain.registry import ConfigRegistry


@dataclasses.dataclass
class CommandContext:
    """Bundles everything a command handler needs.

    Built by the platform adapter for each slash-command invocation and
    passed to the handler. ``respond`` sends a reply that only the invoking
    member can see.
    """
    guild_id: int
    user_id: int
    is_admin: bool
    respond: Callable[[str], Awaitable[None]]
    registry: ConfigRegistry
    engine: StoryEngine
    notifier: StoryNotifier
    command: str = ""               # set by the dispatcher
