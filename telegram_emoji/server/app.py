"""MCP server wiring.

Registers every EmojiTools operation as an MCP tool on a FastMCP server.
The transport (stdio) and framing are handled by the mcp library.
"""

from __future__ import annotations

from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP, Image
from pydantic import Field

from telegram_emoji.server.tools import Content, EmojiTools, PngImage

SERVER_NAME = "telegram-emoji"

INSTRUCTIONS = """This server exposes custom emoji for Telegram messages.

## Workflow
1. search_packs → find packs by keyword on fstik.app
2. sync_emoji_pack → download pack via Telegram Bot API (gets real custom_emoji_id + thumbnails)
3. get_pack → ALWAYS look at the sprite sheet preview to see what emojis actually look like
4. Pick emojis visually from the sprite sheet, NEVER guess by unicode fallback
5. send_message → send with <tg-emoji> HTML tags

## Style rules for posts
- Use 1 custom emoji per section header, don't spam every line
- Keep it clean: emoji before bold title, plain text for content
- Pick emojis that match the section meaning (e.g. 🔥 for hot news, 💬 for chat features)
- Max 5-8 custom emojis per post, not more"""


def to_mcp_content(parts: list[Content]) -> list[str | Image]:
    """Convert tool content parts into values FastMCP knows how to send."""
    return [
        Image(data=part.data, format="png") if isinstance(part, PngImage) else part
        for part in parts
    ]


def build_server(tools: EmojiTools) -> FastMCP:
    """Create the FastMCP server with every tool bound to ``tools``."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool(
        description=(
            "Search for custom emoji packs on fstik.app. Returns pack names; "
            "then use sync_emoji_pack to download them."
        )
    )
    async def search_packs(
        query: Annotated[
            str,
            Field(description="Search query (e.g. 'icon', 'fire', 'cat', 'neon', 'gradient')"),
        ],
        limit: Annotated[int, Field(description="Max results")] = 10,
    ):
        return to_mcp_content(await tools.search_packs(query, limit))

    @mcp.tool(
        description=(
            "Sync a custom emoji sticker set via Telegram Bot API. Downloads real "
            "custom_emoji_id values and thumbnails, generates a preview sprite sheet.\n"
            "After syncing, ALWAYS call get_pack to see the visual preview before "
            "using any emojis."
        )
    )
    async def sync_emoji_pack(
        pack_name: Annotated[
            str | None,
            Field(
                description=(
                    "Sticker set name to sync. If omitted, syncs all packs from "
                    "EMOJI_PACKS env."
                )
            ),
        ] = None,
    ):
        return to_mcp_content(await tools.sync_emoji_pack(pack_name))

    @mcp.tool(
        description=(
            "List all synced emoji packs with emoji counts. "
            "Use get_pack to see visual previews."
        )
    )
    async def list_packs():
        return to_mcp_content(tools.list_packs())

    @mcp.tool(
        description=(
            "Get all emojis from a synced pack with visual preview sprite sheet.\n"
            "IMPORTANT: Always look at the preview image to see what each emoji "
            "actually looks like before selecting emojis for messages. The sprite "
            "sheet shows thumbnails in a grid with index numbers and IDs."
        )
    )
    async def get_pack(
        pack_name: Annotated[str, Field(description="Sticker set name")],
    ):
        return to_mcp_content(tools.get_pack(pack_name))

    @mcp.tool(
        description=(
            "Search synced emojis by unicode fallback character or custom_emoji_id "
            "substring. For visual selection, use get_pack instead to see the "
            "sprite sheet."
        )
    )
    async def search_emoji(
        query: Annotated[
            str, Field(description="Search query: unicode emoji or id substring")
        ],
    ):
        return to_mcp_content(tools.search_emoji(query))

    @mcp.tool(
        description=(
            "View a single emoji full-size by index number (from sprite sheet) or "
            "custom_emoji_id. Use this to inspect a specific emoji before using it."
        )
    )
    async def get_emoji(
        pack_name: Annotated[str, Field(description="Sticker set name")],
        index: Annotated[
            int | None,
            Field(description="1-based index from sprite sheet (e.g. #3 → index 3)"),
        ] = None,
        emoji_id: Annotated[
            str | None, Field(description="custom_emoji_id to look up")
        ] = None,
    ):
        return to_mcp_content(await tools.get_emoji(pack_name, index, emoji_id))

    @mcp.tool(
        description=(
            "Format text with custom emoji placeholders into Telegram MarkdownV2 or "
            "HTML. Use :emoji_fallback: or {custom_emoji_id} as placeholders."
        )
    )
    async def format_message(
        text: Annotated[
            str,
            Field(
                description=(
                    "Text with emoji placeholders like :🔥: or {5368324170671202286}"
                )
            ),
        ],
        format: Annotated[
            Literal["html", "markdownv2"], Field(description="Output format")
        ] = "html",
    ):
        return to_mcp_content(tools.format_message(text, format))

    @mcp.tool(
        description=(
            "Send a Telegram message with custom emoji (HTML parse_mode). Use "
            '<tg-emoji emoji-id="ID">fallback</tg-emoji> for custom emojis in '
            "the text."
        )
    )
    async def send_message(
        chat_id: Annotated[str, Field(description="Telegram chat ID to send to")],
        text: Annotated[
            str,
            Field(description="HTML-formatted message text with <tg-emoji> tags"),
        ],
    ):
        return to_mcp_content(await tools.send_message(chat_id, text))

    return mcp
