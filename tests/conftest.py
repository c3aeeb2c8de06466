"""Shared fixtures: in-memory fakes of the platform capability interfaces."""

import asyncio
import os

# Keep test runs from writing a log file into the working directory
os.environ.setdefault("LOG_FILE", "")

from datetime import datetime, timedelta, timezone

import pytest

from storychain.engine import StoryEngine
from storychain.errors import PlatformCallError
from storychain.notifications import StoryNotifier
from storychain.registry import ConfigRegistry

GUILD = 1001
CHANNEL = 2001
OTHER_CHANNEL = 2002


class FakeChannel:
    def __init__(self, channel_id: int, fail: bool = False):
        self.id = channel_id
        self.fail = fail
        self.sent = []

    async def send(self, content):
        if self.fail:
            raise PlatformCallError("send refused")
        self.sent.append(content)


class FakeMessage:
    def __init__(self, content: str, author_id: int = 1, channel_id: int = CHANNEL,
                 fail: bool = False, yield_on_react: bool = False):
        self.content = content
        self.author_id = author_id
        self.channel_id = channel_id
        self.fail = fail
        self.yield_on_react = yield_on_react
        self.deleted = False
        self.reactions = []
        self.replies = []

    async def delete(self):
        if self.fail:
            raise PlatformCallError("delete refused")
        self.deleted = True

    async def react(self, marker):
        if self.yield_on_react:
            await asyncio.sleep(0)
        if self.fail:
            raise PlatformCallError("react refused")
        self.reactions.append(marker)

    async def reply(self, text):
        if self.fail:
            raise PlatformCallError("reply refused")
        self.replies.append(text)


class FakeDirectory:
    """Creates channels on first lookup unless told a channel is missing."""

    def __init__(self):
        self.channels = {}
        self.missing = set()

    def channel(self, channel_id: int) -> FakeChannel:
        if channel_id not in self.channels:
            self.channels[channel_id] = FakeChannel(channel_id)
        return self.channels[channel_id]

    async def fetch_channel(self, channel_id):
        if channel_id in self.missing:
            raise PlatformCallError(f"unknown channel {channel_id}")
        return self.channel(channel_id)


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self):
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def registry():
    return ConfigRegistry()


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def notifier(directory):
    return StoryNotifier(directory, acceptance_marker="✅")


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def engine(registry, notifier, clock):
    return StoryEngine(registry, notifier, clock=clock)


@pytest.fixture
def bound(registry):
    """A registry with CHANNEL bound as GUILD's story channel."""
    registry.bind_channel(GUILD, CHANNEL)
    return registry
