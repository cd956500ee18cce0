"""Response objects returned by request execution."""

from __future__ import annotations

import json
from collections.abc import Mapping
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, ClassVar

from keystone.errors import InvalidArgumentError
from keystone.foundation.kinds import ResponseKind

if TYPE_CHECKING:
    from keystone.foundation.application import Application


class Response:
    """Base response: content, status code and headers."""

    kind: ClassVar[ResponseKind | None] = None
    content_type: ClassVar[str] = "text/plain"

    def __init__(
        self,
        app: Application,
        content: Any = "",
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        if headers is None:
            headers = {}
        if not isinstance(headers, Mapping):
            raise InvalidArgumentError(
                f"Response headers must be a mapping, got {type(headers).__name__}"
            )
        self._app = app
        self.content = content
        self._status = HTTPStatus.OK
        self.set_status(status)
        self._headers = {str(key): str(value) for key, value in headers.items()}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status})"

    def __str__(self) -> str:
        return self.render()

    @property
    def app(self) -> Application:
        return self._app

    @property
    def status(self) -> int:
        return self._status.value

    @property
    def status_text(self) -> str:
        return self._status.phrase

    @property
    def charset(self) -> str:
        return self._app.environment.charset

    @property
    def headers(self) -> dict[str, str]:
        """Response headers, with a default ``Content-Type`` if none was set."""
        headers = dict(self._headers)
        if not any(key.lower() == "content-type" for key in headers):
            headers["Content-Type"] = f"{self.content_type}; charset={self.charset}"
        return headers

    def set_status(self, status: int) -> Response:
        """Set the HTTP status code.

        Raises:
            InvalidArgumentError: If ``status`` is not a known HTTP status code

        """
        if isinstance(status, bool) or not isinstance(status, int):
            raise InvalidArgumentError(f"Status must be an integer, got {status!r}")
        try:
            self._status = HTTPStatus(status)
        except ValueError:
            raise InvalidArgumentError(f"Unknown HTTP status code {status}") from None
        return self

    def set_header(self, name: str, value: str, replace: bool = True) -> Response:
        if replace or name not in self._headers:
            self._headers[name] = str(value)
        return self

    def render(self) -> str:
        return "" if self.content is None else str(self.content)


class HtmlResponse(Response):
    kind = ResponseKind.HTML
    content_type = "text/html"


class JsonResponse(Response):
    """Response whose content is serialised to JSON when rendered."""

    kind = ResponseKind.JSON
    content_type = "application/json"

    def render(self) -> str:
        return json.dumps(self.content, ensure_ascii=False, default=str)
