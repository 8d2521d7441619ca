# =============================================================================
# core/__init__.py
# =============================================================================
# Query construction, response shaping, and the openFDA client.
#
# Nothing in this package imports FastMCP, Google ADK, or any orchestration
# framework.  Builders and formatters are pure functions over plain dicts;
# the only I/O lives in core/api_client.py.
# =============================================================================
