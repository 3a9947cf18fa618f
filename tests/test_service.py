"""End-to-end tests for the tollgate service through the ASGI interface."""

import logging
from datetime import datetime

import anyio
import pytest

from tollgate.app import App
from tollgate.config import AppConfig
from tollgate.service import HEALTH_STATUS, PROTECTED_MESSAGE, PUBLIC_MESSAGE, create_app
from tollgate.testing import TestClient

TOKEN = "mysecrettoken"

AUTH = {"Authorization": f"Bearer {TOKEN}"}


class TestPublicAndHealth:
    @pytest.mark.parametrize("headers", [None, AUTH, {"Authorization": "garbage"}])
    async def test_public_ignores_headers(self, client: TestClient, headers: dict[str, str] | None) -> None:
        response = await client.get("/public", headers=headers)
        assert response.status == 200
        assert response.body == {"message": PUBLIC_MESSAGE}

    async def test_health(self, client: TestClient) -> None:
        response = await client.get("/health", headers={"Authorization": "Bearer wrong"})
        assert response.status == 200
        assert response.body["status"] == HEALTH_STATUS
        timestamp = response.body["timestamp"]
        assert timestamp.endswith("Z")
        assert datetime.fromisoformat(timestamp).tzinfo is not None

    async def test_json_content_type(self, client: TestClient) -> None:
        response = await client.get("/public")
        assert response.content_type.startswith("application/json")


class TestProtected:
    async def test_missing_header(self, client: TestClient) -> None:
        response = await client.get("/protected")
        assert response.status == 401
        assert response.body == {"error": "Authorization header is missing"}

    @pytest.mark.parametrize("value", ["Bearer", "Bearer "])
    async def test_missing_token(self, client: TestClient, value: str) -> None:
        response = await client.get("/protected", headers={"Authorization": value})
        assert response.status == 401
        assert response.body == {"error": "Bearer token is missing"}

    async def test_invalid_token(self, client: TestClient) -> None:
        response = await client.get("/protected", headers={"Authorization": "Bearer wrongvalue"})
        assert response.status == 401
        assert response.body == {"error": "Invalid or expired token"}

    async def test_valid_token(self, client: TestClient) -> None:
        response = await client.get("/protected", headers=AUTH)
        assert response.status == 200
        assert response.body == {"message": PROTECTED_MESSAGE}

    async def test_token_from_config(self) -> None:
        app = create_app(AppConfig(token="other", banner=False))
        async with TestClient(app) as client:
            rejected = await client.get("/protected", headers=AUTH)
            accepted = await client.get("/protected", headers={"Authorization": "Bearer other"})
        assert rejected.status == 401
        assert accepted.status == 200


class TestNotFound:
    async def test_unknown_path(self, client: TestClient) -> None:
        response = await client.get("/nope")
        assert response.status == 404
        assert response.body == {"error": "Route not found", "path": "/nope", "method": "GET"}

    async def test_unknown_method(self, client: TestClient) -> None:
        response = await client.post("/public")
        assert response.status == 404
        assert response.body == {"error": "Route not found", "path": "/public", "method": "POST"}

    async def test_path_echoed_as_received(self, client: TestClient) -> None:
        response = await client.get("/Nope/Deeper/")
        assert response.body["path"] == "/Nope/Deeper/"

    async def test_percent_encoded_path_echoed_raw(self, client: TestClient) -> None:
        response = await client.get("/n%20pe")
        assert response.status == 404
        assert response.body["path"] == "/n%20pe"

    async def test_percent_encoded_route_not_decoded(self, client: TestClient) -> None:
        response = await client.get("/pub%6Cic")
        assert response.status == 404

    async def test_not_found_skips_auth(self, client: TestClient) -> None:
        response = await client.get("/protected/extra")
        assert response.status == 404


class TestRoutingLeniency:
    async def test_trailing_slash(self, client: TestClient) -> None:
        response = await client.get("/public/")
        assert response.status == 200

    async def test_case_insensitive(self, client: TestClient) -> None:
        response = await client.get("/PROTECTED", headers=AUTH)
        assert response.status == 200

    async def test_head_has_no_body(self, client: TestClient) -> None:
        response = await client.head("/public")
        assert response.status == 200
        assert response.body == {}
        full = len(f'{{"message":"{PUBLIC_MESSAGE}"}}'.encode())
        assert response.header("content-length") == str(full)


class TestLogging:
    async def test_every_request_logged_once_before_handling(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="tollgate.access"):
            await client.get("/public")
            await client.get("/protected")
            await client.get("/nope")

        lines = [r.getMessage() for r in caplog.records if r.name == "tollgate.access"]
        assert len(lines) == 3
        assert lines[0].endswith("] GET /public")
        assert lines[1].endswith("] GET /protected")
        assert lines[2].endswith("] GET /nope")

    async def test_rejected_request_still_logged(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="tollgate.access"):
            response = await client.get("/protected")

        assert response.status == 401
        assert any(r.name == "tollgate.access" for r in caplog.records)


class TestIdempotence:
    @pytest.mark.parametrize(
        ("path", "headers"),
        [
            ("/public", None),
            ("/protected", None),
            ("/protected", {"Authorization": "Bearer"}),
            ("/protected", {"Authorization": "Bearer wrongvalue"}),
            ("/protected", AUTH),
            ("/nope", None),
        ],
    )
    async def test_repeated_requests_identical(
        self, client: TestClient, path: str, headers: dict[str, str] | None
    ) -> None:
        first = await client.get(path, headers=headers)
        second = await client.get(path, headers=headers)
        assert first == second

    async def test_health_differs_only_in_timestamp(self, client: TestClient) -> None:
        first = await client.get("/health")
        second = await client.get("/health")
        assert first.status == second.status == 200
        assert {**first.body, "timestamp": None} == {**second.body, "timestamp": None}


class TestConcurrency:
    async def test_interleaved_requests(self, app: App) -> None:
        results: dict[int, int] = {}
        requests = [
            ("/public", None, 200),
            ("/protected", AUTH, 200),
            ("/protected", None, 401),
            ("/health", None, 200),
            ("/nope", None, 404),
        ] * 10

        async with TestClient(app) as client:

            async def fetch(index: int, path: str, headers: dict[str, str] | None) -> None:
                response = await client.get(path, headers=headers)
                results[index] = response.status

            async with anyio.create_task_group() as tg:
                for index, (path, headers, _) in enumerate(requests):
                    tg.start_soon(fetch, index, path, headers)

        assert [results[i] for i in range(len(requests))] == [r[2] for r in requests]
