"""Discord adapter: wires the story engine to a discord.py client."""
