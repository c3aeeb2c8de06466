"""Process entry point: ``python -m storychain.main`` or the ``storychain`` script."""
from dotenv import load_dotenv
load_dotenv()

import asyncio
import sys

import discord
import uvicorn

from storychain.app import create_app
from storychain.bot.client import StoryBot
from storychain.config import Settings, get_settings
from storychain.registry import ConfigRegistry
from storychain.utils.logging_config import get_logger

logger = get_logger("storychain.main")


async def run(settings: Settings) -> None:
    registry = ConfigRegistry()
    bot = StoryBot(registry, settings)

    if not settings.api_enabled:
        async with bot:
            await bot.start(settings.discord_token)
        return

    server = uvicorn.Server(uvicorn.Config(
        create_app(registry),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    ))
    async with bot:
        await asyncio.gather(bot.start(settings.discord_token), server.serve())


def main() -> None:
    settings = get_settings()

    if not settings.discord_token:
        logger.critical("DISCORD_TOKEN is missing from the environment")
        sys.exit(1)

    try:
        asyncio.run(run(settings))
    except discord.LoginFailure:
        logger.critical("Could not log in to Discord", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
