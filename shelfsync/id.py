import hashlib
import uuid


def make_id(*parts: str | int) -> str:
    """Deterministic UUID string for the given parts.

    The same parts give the same id in every store, so a record created on
    either side of a sync lands on the same key. Catalog ids are case-sensitive,
    so parts are only stripped, never lowercased.
    """
    key = ":".join(str(p).strip() for p in parts)
    return str(uuid.UUID(hashlib.sha256(key.encode()).hexdigest()[:32], version=4))


def new_id() -> str:
    return str(uuid.uuid4())
