from shelfsync.models.profile import Profile
from shelfsync.models.reading_session import ReadingSession
from shelfsync.models.user_book import UserBook

# Tables copied by the sync endpoint, in copy order
SYNCED_TABLES = (Profile.__table__, UserBook.__table__, ReadingSession.__table__)

__all__ = ["Profile", "ReadingSession", "SYNCED_TABLES", "UserBook"]
