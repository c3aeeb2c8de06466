"""StoryChain: a one-word-at-a-time collaborative story game for Discord guilds."""

__version__ = "1.0.0"
