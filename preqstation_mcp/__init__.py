"""
PREQSTATION MCP Server Package

Exposes PREQSTATION task operations (list, get, create, plan, start,
complete, block) as MCP tools backed by the remote PREQSTATION task API.
"""

__version__ = "1.0.0"
