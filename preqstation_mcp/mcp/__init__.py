"""
MCP (Model Context Protocol) Server Package

This package implements the MCP tool layer that lets coding agents read and
update PREQSTATION tasks.

- Every tool validates its input before any remote call
- All task state lives in the PREQSTATION API; nothing is stored locally
"""
