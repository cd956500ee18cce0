"""Application bootstrap, request lifecycle and foundation services."""

from keystone.foundation.application import Application, RequestStack
from keystone.foundation.environment import Environment, EnvironmentSettings
from keystone.foundation.input import Input
from keystone.foundation.kinds import RequestKind, ResponseKind
from keystone.foundation.provider import CollaboratorsProvider, ServicesProvider
from keystone.foundation.request import LocalRequest, Request
from keystone.foundation.response import HtmlResponse, JsonResponse, Response
from keystone.foundation.router import Route, RouteMatch, Router
from keystone.foundation.security import Security, SecuritySettings

__all__ = [
    "Application",
    "CollaboratorsProvider",
    "Environment",
    "EnvironmentSettings",
    "HtmlResponse",
    "Input",
    "JsonResponse",
    "LocalRequest",
    "Request",
    "RequestKind",
    "RequestStack",
    "Response",
    "ResponseKind",
    "Route",
    "RouteMatch",
    "Router",
    "Security",
    "SecuritySettings",
    "ServicesProvider",
]
