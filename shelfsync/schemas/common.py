import uuid
from typing import Annotated

from pydantic import AfterValidator


def canonical_uuid(value: str) -> str:
    """Normalise a user id to the lowercase hyphenated UUID form."""
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ValueError("user_id must be a UUID") from None


# External stores keep user_id in a Postgres UUID column
UserId = Annotated[str, AfterValidator(canonical_uuid)]
