"""Template discovery and rendering."""

from keystone.display.finder import Finder
from keystone.display.manager import View, ViewManager, ViewManagerOptions
from keystone.display.parser import JinjaParser, Parser
from keystone.display.provider import DisplayServicesProvider

__all__ = [
    "DisplayServicesProvider",
    "Finder",
    "JinjaParser",
    "Parser",
    "View",
    "ViewManager",
    "ViewManagerOptions",
]
