from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Mapping, Union

import httpx

from core.classifier import worst_status
from models.status import NormalizedService, ProviderStatus, ServiceStatus

FIXTURES = Path(__file__).parent / "fixtures"

Route = Union[bytes, httpx.Response, Callable[[httpx.Request], httpx.Response]]


def fixture_bytes(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


def timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


def make_client(routes: Mapping[str, Route]) -> httpx.AsyncClient:
    """AsyncClient answering from *routes*; unknown URLs get a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        if isinstance(route, bytes):
            return httpx.Response(200, content=route)
        if isinstance(route, httpx.Response):
            return route
        return route(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def recording(seen: dict, body: bytes) -> Callable[[httpx.Request], httpx.Response]:
    """Route that answers with *body* and stores the read timeout sent per URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        seen[str(request.url)] = request.extensions["timeout"]["read"]
        return httpx.Response(200, content=body)

    return handler


def fetch_status(provider_cls: type, routes: Mapping[str, Route], **kwargs: Any) -> ProviderStatus:
    async def go() -> ProviderStatus:
        async with make_client(routes) as client:
            return await provider_cls(client, **kwargs).fetch_status()

    return asyncio.run(go())


def service_by_name(status: ProviderStatus, name: str) -> NormalizedService:
    return next(svc for svc in status.services if svc.name == name)


def azure_row(name: str, labels: list[str]) -> str:
    cells = "".join(
        f'<td><span class="status-icon" data-label="{label}"></span></td>' for label in labels
    )
    return f"<tr><td><span>{name}</span></td>{cells}</tr>"


def azure_page(rows: Mapping[str, list[str]], table_class: str = "status-table default") -> str:
    body = "".join(azure_row(name, labels) for name, labels in rows.items())
    return (
        f'<table class="{table_class}">'
        "<thead><tr><th>Products</th><th>East US</th><th>West Europe</th></tr></thead>"
        f"<tbody>{body}</tbody></table>"
    )


def make_status(provider: str, statuses: list[ServiceStatus]) -> ProviderStatus:
    services = tuple(
        NormalizedService(
            name=f"Service {i}",
            slug=f"service-{i}",
            region="global",
            status=status,
            status_raw=status.value,
        )
        for i, status in enumerate(statuses)
    )
    worst = worst_status(statuses)
    return ProviderStatus(
        provider=provider,
        overall_status=worst,
        categories=("General",),
        services_by_category={"General": services},
        services=services,
        recent_events=(),
    )
