from shelfsync.mcp.client import ShelfsyncClient


async def library_overview(client: ShelfsyncClient, user_id: str | None) -> dict:
    """Profile plus shelf counts by reading status, to check before syncing."""
    if not user_id:
        return {"error": True, "detail": "Set SHELFSYNC_USER_ID to the user whose library should sync"}

    profile = await client.get(f"/api/users/{user_id}/profile")
    if isinstance(profile, dict) and profile.get("error") is True:
        if profile.get("status") != 404:
            return profile
        profile = None

    books = await client.get(f"/api/users/{user_id}/books")
    if isinstance(books, dict) and books.get("error") is True:
        return books

    by_status: dict[str, int] = {}
    for book in books:
        by_status[book["reading_status"]] = by_status.get(book["reading_status"], 0) + 1
    return {"profile": profile, "books": len(books), "by_status": by_status}
