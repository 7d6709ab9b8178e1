"""Stateless proxy to the hosted chat-completion API."""

import logging
from dataclasses import dataclass

import httpx

from shelfsync.config import AI_GATEWAY_URL, AI_MODEL, AI_TIMEOUT, ai_api_key

logger = logging.getLogger(__name__)

GENERIC_REPLY = "Sorry, I encountered an error. Please try again."
RATE_LIMITED_REPLY = "I apologize, but I am currently experiencing high demand. Please try again in a moment."
CREDITS_EXHAUSTED_REPLY = "AI credits have been exhausted. Please contact the administrator."
EMPTY_REPLY = "No response generated"


@dataclass
class ChatReply:
    status_code: int
    response: str
    error: str | None = None


def build_messages(messages: list[dict], system_prompt: str) -> list[dict]:
    return [
        {"role": "system", "content": system_prompt},
        *({"role": m["role"], "content": m["content"]} for m in messages),
    ]


def _extract_reply(data: dict) -> str:
    choices = data.get("choices") or []
    if not choices:
        return EMPTY_REPLY
    message = choices[0].get("message") or {}
    return message.get("content") or EMPTY_REPLY


async def complete_chat(
    messages: list[dict], system_prompt: str, mode: str | None = None
) -> ChatReply:
    """Forward a conversation to the gateway and map its failures to replies."""
    api_key = ai_api_key()
    if not api_key:
        logger.error("SHELFSYNC_AI_API_KEY is not configured")
        return ChatReply(500, GENERIC_REPLY, "AI service is not configured")

    logger.info("Processing %s request with %d messages", mode or "chat", len(messages))
    try:
        async with httpx.AsyncClient(timeout=AI_TIMEOUT) as client:
            resp = await client.post(
                f"{AI_GATEWAY_URL}/chat/completions",
                headers={"Authorization": f"Bearer {api_key}"},
                json={"model": AI_MODEL, "messages": build_messages(messages, system_prompt)},
            )
    except httpx.HTTPError as e:
        logger.error("AI gateway request failed: %s", e)
        return ChatReply(500, GENERIC_REPLY, str(e) or "AI gateway request failed")

    if resp.status_code == 429:
        logger.warning("AI gateway rate limited the request")
        return ChatReply(429, RATE_LIMITED_REPLY, "Rate limit exceeded. Please try again in a moment.")
    if resp.status_code == 402:
        logger.warning("AI gateway credits exhausted")
        return ChatReply(402, CREDITS_EXHAUSTED_REPLY, "AI credits exhausted.")
    if resp.status_code != 200:
        logger.error("AI gateway error: %d %s", resp.status_code, resp.text)
        return ChatReply(500, GENERIC_REPLY, f"AI gateway error: {resp.status_code}")

    try:
        data = resp.json()
    except ValueError:
        logger.error("AI gateway returned a non-JSON body: %s", resp.text[:200])
        return ChatReply(500, GENERIC_REPLY, "AI gateway returned an invalid response")
    if not isinstance(data, dict):
        logger.error("AI gateway returned unexpected JSON: %r", data)
        return ChatReply(500, GENERIC_REPLY, "AI gateway returned an invalid response")

    logger.info("Successfully generated response")
    return ChatReply(200, _extract_reply(data))
