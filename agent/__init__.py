# =============================================================================
# agent/__init__.py
# =============================================================================
# Google ADK agent that answers questions about FDA data by calling the
# tools in tools/mcp_server.py over MCP (stdio).
#
# The agent decides WHICH tools to call and how to read their output; it has
# no direct access to openFDA and no query logic of its own.
# =============================================================================
