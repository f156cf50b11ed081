"""MCP server exposing the emoji toolkit.

Usage:
    python -m telegram_emoji.server             # Serve over stdio
    python -m telegram_emoji.server --verbose   # With debug logging on stderr
"""
