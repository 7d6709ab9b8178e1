from fastmcp import FastMCP

from shelfsync.mcp.client import ShelfsyncClient
from shelfsync.mcp.state import SyncState
from shelfsync.mcp.tools.chat import ask_reading_assistant as _ask_reading_assistant
from shelfsync.mcp.tools.library import library_overview as _library_overview
from shelfsync.mcp.tools.sync import (
    check_external_connection as _check_external_connection,
    last_synced as _last_synced,
    sync_library as _sync_library,
)


def create_mcp_server(client: ShelfsyncClient, state: SyncState, user_id: str | None) -> FastMCP:
    mcp = FastMCP(
        name="shelfsync",
        instructions=(
            "Shelfsync keeps a reading library in step with an external Postgres "
            "database. Use these tools to export or import the library, check the "
            "external connection, and ask the reading assistant questions."
        ),
    )

    @mcp.tool()
    async def sync_library(direction: str = "export", confirm: bool = False) -> dict:
        """Copy the library to ('export'), from ('import') or both ways ('both')
        with the external database. Imports can overwrite local edits, so
        'import' and 'both' need confirm=True."""
        return await _sync_library(client, state, user_id, direction=direction, confirm=confirm)

    @mcp.tool()
    async def test_external_connection() -> dict:
        """Check that the external database is reachable without copying data."""
        return await _check_external_connection(client)

    @mcp.tool()
    async def last_synced() -> dict:
        """When this machine last completed a sync (advisory only)."""
        return await _last_synced(state)

    @mcp.tool()
    async def library_overview() -> dict:
        """Show the profile and how many books are on the shelf, by reading status."""
        return await _library_overview(client, user_id)

    @mcp.tool()
    async def ask_reading_assistant(
        question: str,
        mode: str = "chat",
        system_prompt: str | None = None,
    ) -> dict:
        """Ask the AI reading assistant. Modes: chat, summary, recommend, analyze."""
        return await _ask_reading_assistant(client, question=question, mode=mode, system_prompt=system_prompt)

    return mcp
