"""Core business logic: reference data, estimation, scoring, API clients and models.

Framework-agnostic. Nothing here imports MCP or FastMCP; the server module
wires these pieces into tools.
"""
