import logging

from fastapi import FastAPI

from shelfsync.config import LOG_LEVEL
from shelfsync.routers import chat, profiles, sessions, sync, user_books


def create_app() -> FastAPI:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = FastAPI(title="Shelfsync", version="0.1.0")
    app.include_router(profiles.router)
    app.include_router(user_books.router)
    app.include_router(sessions.router)
    app.include_router(sync.router)
    app.include_router(chat.router)
    return app


app = create_app()
