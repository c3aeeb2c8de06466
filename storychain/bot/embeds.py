"""Rendering of structured notices as Discord embeds."""

from __future__ import annotations

import discord

from storychain.notifications import CompletionNotice

# Discord rejects embed descriptions longer than this
EMBED_DESCRIPTION_LIMIT = 4096
_FENCE = "```"


def _fenced(text: str) -> str:
    room = EMBED_DESCRIPTION_LIMIT - 2 * len(_FENCE)
    if len(text) > room:
        text = text[: room - 1] + "…"
    return f"{_FENCE}{text}{_FENCE}"


def build_completion_embed(notice: CompletionNotice, color: int = 0x808080) -> discord.Embed:
    unix_ts = int(notice.completed_at.timestamp())
    embed = discord.Embed(
        title="📖 Story complete",
        description=_fenced(notice.content),
        color=color,
        timestamp=notice.completed_at,
    )
    embed.add_field(name="👥 Participants", value=f"{notice.participant_count} people", inline=True)
    embed.add_field(name="📝 Words", value=str(notice.word_count), inline=True)
    embed.add_field(name="🕐 Time", value=f"<t:{unix_ts}:T>", inline=True)
    return embed
