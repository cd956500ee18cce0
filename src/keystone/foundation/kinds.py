"""Request and response variants published by the foundation services."""

from __future__ import annotations

from enum import StrEnum


class ResponseKind(StrEnum):
    """Concrete response variants; ``"response"`` resolves to the default."""

    HTML = "html"
    JSON = "json"

    @classmethod
    def default(cls) -> ResponseKind:
        return cls.HTML

    @property
    def service_name(self) -> str:
        return f"response.{self.value}"


class RequestKind(StrEnum):
    """Concrete request variants; ``"request"`` resolves to the default."""

    LOCAL = "local"

    @classmethod
    def default(cls) -> RequestKind:
        return cls.LOCAL

    @property
    def service_name(self) -> str:
        return f"request.{self.value}"
