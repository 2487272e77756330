"""FastMCP server exposing the companion session as MCP tools.

Tools:
  - interact(message, source, location)  — one gesture or chat line
  - get_state()                           — persona, stats, moods, display
  - check_in(mood, note)                  — record a mood, get the reaction

Tools act on the process-wide session from backend.companion, so tests can
set it up with init_storage() + init_session() before connecting a client.

Usage:
    uv run python -m backend.mcp_server [--data-dir DIR]
"""

from mcp.server.fastmcp import FastMCP

from backend import companion

mcp = FastMCP("pausepaws")


@mcp.tool()
async def interact(message: str, source: str = "chat", location: str | None = None) -> dict:
    """Send a message or gesture to the companion. Returns the committed result."""
    session = companion.get_session()
    result = await session.interact(message, source=source, location=location)
    if not result.stale:
        companion.persist_stats(session)
    return result.model_dump()


@mcp.tool()
def get_state() -> dict:
    """Current persona, wellbeing stats, mood log and display state."""
    return companion.get_session().snapshot().model_dump()


@mcp.tool()
def check_in(mood: str, note: str | None = None) -> dict:
    """Record how the user feels. Returns the companion's reaction and follow-up choices."""
    session = companion.get_session()
    result = session.check_in(mood, note)
    companion.persist_mood(result.entry)
    companion.persist_stats(session)
    return result.model_dump()


if __name__ == "__main__":
    import argparse
    import os
    from pathlib import Path

    from backend import storage

    parser = argparse.ArgumentParser(description="PausePaws MCP server")
    parser.add_argument("--data-dir", type=Path,
                        default=Path(os.getenv("DATA_DIR", Path(__file__).parent.parent / "data")))
    args = parser.parse_args()
    storage.init_storage(args.data_dir)
    companion.init_session()
    mcp.run()
