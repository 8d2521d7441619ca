# =============================================================================
# main.py  -  Entry Point for the FDA Research Assistant
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
#   To run only the tool server (for Claude Desktop or any MCP client):
#   uv run openfda-mcp
#
# WHAT HAPPENS:
#   1. Creates the Google ADK agent (agent/fda_agent.py)
#   2. ADK launches tools/mcp_server.py as a stdio subprocess
#   3. Each question is sent to the agent, which picks openFDA tools
#   4. Tool calls are printed as they happen
#   5. The final answer is displayed
#
# EXAMPLE QUESTIONS:
#   "Were there any Class I drug recalls in 2023?"
#   "What are the most reported reactions for ibuprofen?"
#   "What does the label say about metformin in pregnancy?"
#   "Is amoxicillin currently in shortage?"
#
# GOOGLE ADK CONCEPTS USED:
#   - Runner: Manages the agent's execution lifecycle
#   - SessionService: Tracks conversation state across turns
#   - Content/Part: ADK's message format
#   - Event stream: Real-time updates as the agent thinks and acts
# =============================================================================

import asyncio

from dotenv import load_dotenv

# LiteLlm reads its provider key (OPENROUTER_API_KEY, ...) and the tool server
# reads FDA_API_KEY from the environment, so .env must be loaded first.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.fda_agent import create_agent

APP_NAME = "fda_research"
USER_ID = "demo_user"


async def run_agent():
    """Run the FDA research assistant interactively."""

    # =========================================================================
    # Step 1: Create the agent
    # =========================================================================
    print("=" * 70)
    print("  FDA RESEARCH ASSISTANT")
    print("  Powered by Google ADK + openFDA + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    # =========================================================================
    # Step 2: Create a Runner and Session
    # =========================================================================
    # InMemorySessionService keeps the conversation in RAM, so follow-up
    # questions ("what about the device recalls?") keep their context.
    # =========================================================================
    session_service = InMemorySessionService()

    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )

    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")

    # =========================================================================
    # Step 3: Interactive loop
    # =========================================================================
    print("💬 Ask about FDA drug, device or food data!")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is researching...\n")
        print("-" * 70)

        # =====================================================================
        # Step 4: Stream the agent's response
        # =====================================================================
        # Events carry text, tool calls and tool results.  Tool calls are
        # echoed so you can see which openFDA datasets were consulted; the
        # last text part is the answer.
        # =====================================================================
        final_response = ""

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text

                    if getattr(part, "function_call", None):
                        call = part.function_call
                        print(f"  🔧 Calling tool: {call.name} {dict(call.args or {})}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
