from fastapi import APIRouter
from fastapi.responses import JSONResponse

from shelfsync.schemas.chat import ChatRequest, ChatResponse
from shelfsync.services.chat import complete_chat

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatResponse, response_model_exclude_none=True)
async def ai_book_chat(data: ChatRequest):
    reply = await complete_chat(
        [m.model_dump() for m in data.messages],
        data.system_prompt,
        mode=data.mode,
    )
    if reply.status_code != 200:
        return JSONResponse(
            status_code=reply.status_code,
            content={"error": reply.error, "response": reply.response},
        )
    return ChatResponse(response=reply.response)
