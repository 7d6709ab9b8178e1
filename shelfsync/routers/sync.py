import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from shelfsync.config import external_db_url
from shelfsync.database import get_engine
from shelfsync.schemas.sync import ConnectionTestResponse, SyncRequest, SyncResponse
from shelfsync.services.conflict import get_policy
from shelfsync.services.external_store import ExternalStore, ExternalStoreConfigError
from shelfsync.services.sync_service import check_connection, run_sync

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.post("", response_model=SyncResponse | ConnectionTestResponse, response_model_exclude_none=True)
async def sync_external_db(
    data: SyncRequest,
    engine: AsyncEngine = Depends(get_engine),
):
    logger.info(
        "Sync request received: direction=%s user=%s",
        data.direction,
        "present" if data.user_id else "missing",
    )

    url = external_db_url()
    try:
        store = ExternalStore.from_url(url)
    except ExternalStoreConfigError as e:
        logger.error("External database is misconfigured: %s", e)
        return JSONResponse(
            status_code=400,
            content={"success": False, "connected": False, "error": str(e)},
        )

    if data.direction == "test":
        check = await check_connection(store)
        return ConnectionTestResponse(connected=check.connected, message=check.message, error=check.error)

    if not data.user_id:
        await store.close()
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "User ID is required for sync operations"},
        )

    result = await run_sync(engine, store, data.user_id, data.direction, get_policy(data.conflict_policy))
    if not result.success:
        return JSONResponse(status_code=500, content=result.as_dict())
    return result.as_dict()
