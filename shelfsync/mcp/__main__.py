import os
import subprocess
import sys
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from shelfsync.app import create_app
from shelfsync.config import STATE_PATH, USER_ID
from shelfsync.mcp.client import ShelfsyncClient
from shelfsync.mcp.server import create_mcp_server
from shelfsync.mcp.state import SyncState


def run_migrations():
    """Run Alembic migrations before starting the MCP server."""
    db_path = os.environ.get("SHELFSYNC_DB_PATH", "shelfsync.db")
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=False,
    )
    if result.returncode != 0:
        sys.exit(1)


def main():
    run_migrations()

    app = create_app()
    transport = ASGITransport(app=app)
    http = AsyncClient(transport=transport, base_url="http://localhost")
    client = ShelfsyncClient(http)
    mcp = create_mcp_server(client, SyncState(STATE_PATH), USER_ID)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
