"""Input schemas for PREQSTATION MCP tools."""
