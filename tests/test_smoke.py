"""
tests.test_smoke

Smoke tests for the placeholder services.

Responsibilities:
- Ensure every service app boots and serves its fixed body on `GET /`.
- Cover port resolution defaults and the bind-failure exit path.
"""

from __future__ import annotations

import socket

import httpx
import pytest

from rd_orms.api.__main__ import main
from rd_orms.api.app import create_app
from rd_orms.api.services import SERVICES, get_service
from rd_orms.settings import Settings, get_settings, port_from_env

EXPECTED = {
    "root": ("Hello World", 3000),
    "prisma": ("Prisma Service", 3001),
    "typeorm": ("TypeORM Service", 3002),
    "sequelize": ("Sequelize Service", 3003),
    "drizzle": ("Drizzle Service", 4004),
}


@pytest.mark.asyncio
@pytest.mark.parametrize("key", sorted(EXPECTED))
async def test_root_route_serves_fixed_body(key: str) -> None:
    app = create_app(service=get_service(key), settings=Settings(env="test"))

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/")
        assert r.status_code == 200
        assert r.text == EXPECTED[key][0]
        assert r.headers["content-type"].startswith("text/plain")
        assert r.headers["x-request-id"]

        r = await client.get("/docs")
        assert r.status_code == 404


@pytest.mark.asyncio
async def test_request_id_is_propagated() -> None:
    app = create_app(service=get_service("prisma"), settings=Settings(env="test"))

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/", headers={"x-request-id": "abc-123"})
        assert r.headers["x-request-id"] == "abc-123"


def test_default_ports_without_env() -> None:
    for key, (_, port) in EXPECTED.items():
        assert SERVICES[key].resolve_port(environ={}) == port


def test_default_ports_are_distinct_and_variables_are_distinct() -> None:
    assert len({s.default_port for s in SERVICES.values()}) == len(SERVICES)
    assert len({s.port_env for s in SERVICES.values()}) == len(SERVICES)


@pytest.mark.parametrize("raw", ["", "abc", "0", "-3", "12.5", "65536", "70000"])
def test_invalid_port_falls_back_to_default(raw: str) -> None:
    assert port_from_env("SERVICE_PORT_PRISMA", 3001, {"SERVICE_PORT_PRISMA": raw}) == 3001


def test_configured_port_wins() -> None:
    assert get_service("drizzle").resolve_port({"SERVICE_PORT_DRIZZLE": "5123"}) == 5123


def test_unknown_service_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["mongoose"]) == 1
    assert "Unknown service: mongoose" in capsys.readouterr().err


def test_bind_failure_exits_1(monkeypatch: pytest.MonkeyPatch) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as taken:
        taken.bind(("127.0.0.1", 0))
        taken.listen()
        port = taken.getsockname()[1]
        monkeypatch.setenv("SERVICE_PORT_TYPEORM", str(port))
        monkeypatch.setenv("RD_ORMS_API_HOST", "127.0.0.1")

        get_settings.cache_clear()
        try:
            assert main(["typeorm"]) == 1
        finally:
            get_settings.cache_clear()


# --- Module Notes -----------------------------------------------------------
# The success path of `main` blocks in uvicorn, so only the failure exits are exercised here.
