"""Tests for tollgate.errors and tollgate.server.errors — 404 and 500 terminals."""

import logging
from datetime import datetime

import pytest

from tollgate.errors import ConfigurationError, StageError, TollgateError
from tollgate.http.request import Request
from tollgate.http.response import Response
from tollgate.server.errors import (
    INTERNAL_ERROR,
    NOT_FOUND,
    check_encodable,
    custom_not_found,
    handle_internal_error,
    not_found,
)


class TestHierarchy:
    def test_configuration_error_is_tollgate_error(self) -> None:
        assert issubclass(ConfigurationError, TollgateError)

    def test_stage_error_is_tollgate_error(self) -> None:
        assert issubclass(StageError, TollgateError)


class TestNotFound:
    def test_echoes_path_and_method(self) -> None:
        response = not_found(Request("DELETE", "/Some/Path/"))
        assert response.status == 404
        assert response.body == {"error": NOT_FOUND, "path": "/Some/Path/", "method": "DELETE"}

    async def test_custom_handler_status_coerced(self) -> None:
        def missing(request: Request) -> dict[str, str]:
            return {"error": f"nothing at {request.path}"}

        fallback = custom_not_found(missing)
        response = await fallback(Request("GET", "/x"))
        assert response.status == 404
        assert response.body == {"error": "nothing at /x"}
        assert fallback.__name__ == "missing"

    async def test_custom_handler_keeps_explicit_status(self) -> None:
        fallback = custom_not_found(lambda: ({"gone": True}, 410))
        response = await fallback(Request("GET", "/x"))
        assert response.status == 410


class TestInternalError:
    async def test_default_body_hides_detail(self) -> None:
        response = await handle_internal_error(RuntimeError("secret detail"), Request("GET", "/"))
        assert response.status == 500
        assert response.body == {"error": INTERNAL_ERROR}
        assert "secret" not in response.text

    async def test_logs_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="tollgate.server"):
            await handle_internal_error(ValueError("boom"), Request("GET", "/x"))

        record = caplog.records[0]
        assert record.getMessage() == "500 GET /x"
        assert record.exc_info is not None
        assert record.exc_info[0] is ValueError

    async def test_custom_handler_with_exception(self) -> None:
        def handler(request: Request, exc: Exception) -> dict[str, str]:
            return {"error": "custom", "kind": type(exc).__name__}

        response = await handle_internal_error(KeyError("k"), Request("GET", "/"), handler)
        assert response.status == 500
        assert response.body == {"error": "custom", "kind": "KeyError"}

    async def test_custom_handler_without_args(self) -> None:
        async def handler() -> Response:
            return Response({"error": "down"}, status=503)

        response = await handle_internal_error(RuntimeError(), Request("GET", "/"), handler)
        assert response.status == 503

    async def test_failing_custom_handler_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        def handler(request: Request) -> dict[str, str]:
            raise RuntimeError("handler broke")

        with caplog.at_level(logging.ERROR, logger="tollgate.server"):
            response = await handle_internal_error(RuntimeError(), Request("GET", "/"), handler)

        assert response.body == {"error": INTERNAL_ERROR}
        assert any("Error handler failed" in r.getMessage() for r in caplog.records)

    async def test_unencodable_custom_handler_falls_back(self) -> None:
        def handler() -> dict[str, object]:
            return {"error": "custom", "when": object()}

        response = await handle_internal_error(RuntimeError(), Request("GET", "/"), handler)
        assert response.body == {"error": INTERNAL_ERROR}


class TestCheckEncodable:
    def test_plain_body(self) -> None:
        check_encodable(Response({"a": [1, "b", None]}))

    def test_datetime_rejected(self) -> None:
        with pytest.raises(TypeError):
            check_encodable(Response({"at": datetime(2024, 1, 1)}))
