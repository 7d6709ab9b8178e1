from httpx import AsyncClient, Response


class ShelfsyncClient:
    """Thin wrapper around httpx.AsyncClient that translates HTTP responses
    into dicts suitable for MCP tool returns."""

    def __init__(self, http: AsyncClient) -> None:
        self.http = http

    async def get(self, path: str, **kwargs) -> dict | list:
        resp = await self.http.get(path, **kwargs)
        return self._handle(resp)

    async def post(self, path: str, **kwargs) -> dict | list:
        resp = await self.http.post(path, **kwargs)
        return self._handle(resp)

    def _handle(self, resp: Response) -> dict | list:
        if resp.status_code == 204:
            return {"ok": True}
        if resp.status_code < 400:
            return resp.json()
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            if resp.status_code >= 500:
                raise RuntimeError(f"Server error {resp.status_code}: {resp.text}")
            return {"error": True, "status": resp.status_code, "detail": resp.text}
        # Sync and chat failures carry their own JSON body; keep it for partial counts
        detail = body.get("detail") or body.get("error") or resp.text
        return {**body, "error": True, "status": resp.status_code, "detail": detail}
