"""Ordered file lookup across search paths."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class Finder:
    """Finds files relative to a list of search paths, first match wins."""

    def __init__(self, paths: Iterable[str | Path] = ()) -> None:
        self._paths: list[Path] = []
        for path in paths:
            self.add_path(path)

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def add_path(self, path: str | Path) -> Finder:
        resolved = Path(path).resolve()
        if resolved not in self._paths:
            self._paths.append(resolved)
        return self

    def find(self, name: str | Path) -> Path | None:
        """Get the first existing file named ``name`` under the search paths."""
        for path in self._paths:
            candidate = path / name
            if candidate.is_file():
                logger.debug("Found %s at %s", name, candidate)
                return candidate
        return None
