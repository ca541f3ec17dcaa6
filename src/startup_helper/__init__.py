"""Startup Helper MCP Server.

Ask your AI where to open a shop in Korea: commercial-area density, competitors,
foot traffic, startup cost, breakeven and government funding.
Live data from Kakao Local, the SEMAS store registry and Bizinfo grant listings.
"""

__version__ = "1.1.0"

APP_NAME = "startup-helper"
