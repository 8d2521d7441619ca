# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP tool wrappers.
#
# tools/ is the translation layer between the MCP protocol and core/.  Each
# tool collects typed arguments, calls one core/search.py function, and
# serializes the result.  Tools hold no query or formatting logic and never
# import the agent.
# =============================================================================
