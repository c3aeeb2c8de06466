from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    app_name: str = "StoryChain"
    # Bot token; startup aborts when empty
    discord_token: str = ""

    # Reaction added to every accepted word
    acceptance_marker: str = "✅"

    # Colour of the completion embed (grey)
    completion_color: int = 0x808080

    # Logging
    log_file: str = "storychain.log"
    log_level: str = "INFO"

    # Push slash command definitions to Discord on startup
    sync_commands: bool = True

    # Read-only inspection API, served next to the bot when enabled
    api_enabled: bool = False
    api_host: str = "127.0.0.1"
    api_port: int = 8080

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

@lru_cache
def get_settings():
    return Settings()
