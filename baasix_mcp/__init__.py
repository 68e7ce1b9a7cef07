"""Baasix MCP Server - Baasix backend tools over the Model Context Protocol."""

__version__ = "1.0.0"

SERVER_NAME = "baasix-mcp-server"
