from shelfsync.mcp.client import ShelfsyncClient


async def ask_reading_assistant(
    client: ShelfsyncClient,
    question: str,
    mode: str = "chat",
    system_prompt: str | None = None,
) -> dict:
    body = {"messages": [{"role": "user", "content": question}], "mode": mode}
    if system_prompt is not None:
        body["system_prompt"] = system_prompt
    return await client.post("/api/chat", json=body)
