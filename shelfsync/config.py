import os
from pathlib import Path

DB_PATH = os.environ.get("SHELFSYNC_DB_PATH", str(Path.cwd() / "shelfsync.db"))
DATABASE_URL = os.environ.get("SHELFSYNC_DATABASE_URL", f"sqlite+aiosqlite:///{DB_PATH}")

LOG_LEVEL = os.environ.get("SHELFSYNC_LOG_LEVEL", "INFO")

# External Postgres used by the sync endpoint
EXTERNAL_SSL = os.environ.get("SHELFSYNC_EXTERNAL_SSL", "require")
EXTERNAL_CONNECT_TIMEOUT = float(os.environ.get("SHELFSYNC_EXTERNAL_CONNECT_TIMEOUT", "30.0"))
EXTERNAL_POOL_SIZE = int(os.environ.get("SHELFSYNC_EXTERNAL_POOL_SIZE", "5"))

# AI chat gateway settings
AI_GATEWAY_URL = os.environ.get("SHELFSYNC_AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
AI_MODEL = os.environ.get("SHELFSYNC_AI_MODEL", "google/gemini-2.5-flash")
AI_TIMEOUT = float(os.environ.get("SHELFSYNC_AI_TIMEOUT", "60.0"))

# MCP client settings
USER_ID = os.environ.get("SHELFSYNC_USER_ID")
STATE_PATH = os.environ.get("SHELFSYNC_STATE_PATH", str(Path.home() / ".shelfsync" / "state.json"))


def external_db_url() -> str | None:
    """Read on every call so a rotated secret takes effect without a restart."""
    return os.environ.get("EXTERNAL_DB_URL")


def ai_api_key() -> str | None:
    return os.environ.get("SHELFSYNC_AI_API_KEY")
