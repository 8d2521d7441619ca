# =============================================================================
# agent/fda_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent that answers FDA questions.  The agent has
#   no data access of its own; it reaches openFDA only through the tools
#   served by tools/mcp_server.py.
#
#   ┌──────────────────────────────────────────────────────────────┐
#   │                     Google ADK Agent                         │
#   │   System prompt ──▶ LLM (via LiteLlm) ──▶ MCP tool connection │
#   └──────────────────────────────────────────────────────────────┘
#                                                   │ stdio
#                                                   ▼
#                                     ┌───────────────────────────┐
#                                     │ FastMCP server            │
#                                     │ (python -m tools.mcp_server)│
#                                     │  search_* / get_* tools   │
#                                     └───────────────────────────┘
#                                                   │
#                                                   ▼
#                                     ┌───────────────────────────┐
#                                     │ core/ -> api.fda.gov      │
#                                     └───────────────────────────┘
#
# MODEL:
#   Any LiteLlm model string works.  The default routes GPT-4o through
#   OpenRouter (reads OPENROUTER_API_KEY); override with AGENT_MODEL.
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess and talks to it over
#   stdin/stdout.  The subprocess inherits the environment, so FDA_API_KEY
#   and the OPENFDA_* settings reach the server unchanged.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_fda_research_prompt
from core.config import Settings, load_settings

AGENT_NAME = "fda_research_assistant"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def tool_server_parameters() -> StdioServerParameters:
    """How ADK should launch tools/mcp_server.py.

    The server runs as a module from the project root so its `core.` and
    `tools.` imports resolve, using the same interpreter as the agent.
    """
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_agent(settings: Settings | None = None) -> Agent:
    """Create the FDA research agent wired to the openFDA tool server.

    Args:
        settings: Resolved settings; loaded from the environment if omitted.
            Only agent_model is read here, the tool server loads its own.

    Returns:
        A configured Google ADK Agent instance.
    """
    settings = settings or load_settings()

    mcp_tools = MCPToolset(connection_params=tool_server_parameters())

    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=settings.agent_model),
        instruction=get_fda_research_prompt(),
        tools=[mcp_tools],
    )
