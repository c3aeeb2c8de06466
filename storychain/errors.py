"""Exception hierarchy shared by the engine, the registry and the command layer."""

from __future__ import annotations

from storychain import messages


class StoryError(Exception):
    """Base class for every error raised by StoryChain itself."""


class PreconditionFailed(StoryError):
    """An administrative operation cannot run in the guild's current state.

    ``user_message`` is what the invoking administrator gets to see.
    """
    user_message: str = messages.GENERIC_FAILURE

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.user_message)


class NoActiveStory(PreconditionFailed):
    user_message = messages.NO_STORY_IN_PROGRESS


class NotConfigured(PreconditionFailed):
    user_message = messages.NOT_CONFIGURED


class EmptyStory(PreconditionFailed):
    user_message = messages.NO_STORY_IN_PROGRESS


class PermissionDenied(PreconditionFailed):
    user_message = messages.ADMIN_ONLY


class PlatformCallError(StoryError):
    """A call to the messaging platform (send, delete, react, fetch) failed."""
