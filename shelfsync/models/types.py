from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.dialects import postgresql

# Same logical column on SQLite (primary store, tests) and Postgres (external store)
UUIDString = String(36).with_variant(postgresql.UUID(as_uuid=False), "postgresql")
StringList = JSON().with_variant(postgresql.ARRAY(Text), "postgresql")
Timestamp = DateTime(timezone=True)
