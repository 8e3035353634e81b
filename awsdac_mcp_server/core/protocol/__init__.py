"""MCP protocol constants."""
