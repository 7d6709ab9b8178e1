from typing import Literal

from pydantic import AliasChoices, BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1)
    system_prompt: str = Field(
        "You are a helpful reading assistant.",
        validation_alias=AliasChoices("system_prompt", "systemPrompt"),
    )
    mode: Literal["chat", "summary", "recommend", "analyze"] = "chat"


class ChatResponse(BaseModel):
    response: str
    error: str | None = None
