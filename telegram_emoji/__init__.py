"""Telegram custom emoji toolkit.

Caches custom emoji packs from the Telegram Bot API, renders sprite-sheet
previews and resolves emoji placeholders into Telegram message markup.
The operations are exposed to LLM clients through an MCP server.
"""

__version__ = "0.1.0"
