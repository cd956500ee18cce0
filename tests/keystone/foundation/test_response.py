"""Tests for Response, HtmlResponse and JsonResponse."""

import pytest

from keystone.errors import InvalidArgumentError
from keystone.foundation import Application, HtmlResponse, JsonResponse, Response


class TestResponse:
    """Test status, headers and rendering."""

    def test_defaults(self, app: Application) -> None:
        """Verify an empty 200 response with a charset-qualified content type."""
        response = HtmlResponse(app)

        assert response.status == 200
        assert response.status_text == "OK"
        assert response.render() == ""
        assert response.headers == {"Content-Type": "text/html; charset=utf-8"}

    def test_explicit_content_type_is_kept(self, app: Application) -> None:
        """Verify a Content-Type header given by the caller is not overridden."""
        response = HtmlResponse(app, "x", 200, {"content-type": "text/plain"})

        assert response.headers == {"content-type": "text/plain"}

    def test_set_header_replace_flag(self, app: Application) -> None:
        """Verify set_header() only overwrites when asked to."""
        response = Response(app).set_header("X-A", "1")

        response.set_header("X-A", "2", replace=False)
        assert response.headers["X-A"] == "1"

        response.set_header("X-A", "3")
        assert response.headers["X-A"] == "3"

    def test_set_status(self, app: Application) -> None:
        """Verify the status can be changed to another known code."""
        response = Response(app).set_status(404)

        assert response.status == 404
        assert response.status_text == "Not Found"

    @pytest.mark.parametrize("status", [0, 999, "200", True, None])
    def test_invalid_status_raises(self, app: Application, status: object) -> None:
        """Verify unknown or non-integer status codes are rejected."""
        with pytest.raises(InvalidArgumentError):
            Response(app, "", status)  # type: ignore[arg-type]

    def test_headers_must_be_mapping(self, app: Application) -> None:
        """Verify headers given as a list are rejected."""
        with pytest.raises(InvalidArgumentError, match="mapping"):
            Response(app, "", 200, [("X-A", "1")])  # type: ignore[arg-type]

    def test_str_renders_content(self, app: Application) -> None:
        """Verify str() renders the response body."""
        assert str(HtmlResponse(app, 42)) == "42"


class TestJsonResponse:
    """Test JSON serialisation."""

    def test_renders_json(self, app: Application) -> None:
        """Verify content is serialised and the content type is JSON."""
        response = JsonResponse(app, {"name": "Zoë", "ids": [1, 2]})

        assert response.render() == '{"name": "Zoë", "ids": [1, 2]}'
        assert response.headers["Content-Type"] == "application/json; charset=utf-8"

    def test_string_content_is_encoded(self, app: Application) -> None:
        """Verify plain strings become JSON strings."""
        assert JsonResponse(app, "hi").render() == '"hi"'
