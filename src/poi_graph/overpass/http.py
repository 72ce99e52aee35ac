from __future__ import annotations

import httpx


def default_timeout(read_s: float = 60.0) -> httpx.Timeout:
    return httpx.Timeout(connect=10.0, read=read_s, write=20.0, pool=10.0)


def default_limits() -> httpx.Limits:
    return httpx.Limits(max_connections=20, max_keepalive_connections=5)


class HttpClientFactory:
    """Creates httpx clients with sane defaults.

    `transport` lets tests plug in `httpx.MockTransport`.
    """

    @staticmethod
    def client(
        base_url: str | None = None,
        headers: dict | None = None,
        *,
        read_timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url or "",
            headers=headers,
            timeout=default_timeout(read_timeout_s),
            limits=default_limits(),
            follow_redirects=True,
            transport=transport,
        )
