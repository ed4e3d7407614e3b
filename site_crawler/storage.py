"""site_crawler.storage: writing fetched pages to the local file system."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol, Union

from site_crawler.errors import PersistenceError
from site_crawler.logger import logger

__all__ = ["PageStorage", "FileStorage", "url_to_filename"]

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.\-]")


def url_to_filename(url: str, suffix: str = ".html") -> str:
    """Flatten a URL into a file name by stripping everything but letters, digits, ``.`` and ``-``.

    Different URLs can map to the same name (``/a/b`` and ``/ab``); the later
    write wins.
    """
    return _UNSAFE_CHARS.sub("", url) + suffix


class PageStorage(Protocol):
    def prepare(self) -> None: ...

    def save(self, name: str, content: bytes) -> None: ...


class FileStorage:
    """Saves every page as a flat file inside one output directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root).expanduser()

    def prepare(self) -> None:
        """Create the output directory if it does not exist yet."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(str(self.root), exc.strerror or str(exc)) from exc

    def save(self, name: str, content: bytes) -> None:
        target = self.root / name
        try:
            target.write_bytes(content)
        except OSError as exc:
            raise PersistenceError(name, exc.strerror or str(exc)) from exc
        logger.debug("Wrote %d bytes to %s", len(content), target)
