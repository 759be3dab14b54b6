"""Session collaborator: the interface topics use to reach the Freebase API.

``Session`` is the protocol consumed by ``Topic`` and ``search``. The package
ships one implementation, ``FixtureSession``, which serves recorded API
responses from a directory:

    <root>/topic/<slug>.json     Topic API records   (``/en/github`` → ``en_github.json``)
    <root>/search/<slug>.json    Search API results  (``"Bob Dylan"`` → ``bob_dylan.json``)
    <root>/image/<slug>.<ext>    raw image bytes
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional, Protocol, Union

from freebase_api.errors import ServiceError

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


class Session(Protocol):
    """The three API calls a topic needs."""

    def topic(self, id: str, **options: Any) -> dict[str, Any]: ...

    def search(self, query: str, **options: Any) -> list[dict[str, Any]]: ...

    def image(self, id: str, **options: Any) -> Optional[bytes]: ...


def id_slug(id: str) -> str:
    """File stem for a topic id: ``"/en/github"`` → ``"en_github"``."""
    return id.strip("/").replace("/", "_")


def query_slug(query: str) -> str:
    """File stem for a search query: ``"Bob Dylan"`` → ``"bob_dylan"``."""
    return _NON_ALNUM.sub("_", query.lower()).strip("_")


class FixtureSession:
    """Serve recorded Topic / Search / Image responses from disk."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def topic(self, id: str, **options: Any) -> dict[str, Any]:
        """Return the recorded topic record for *id*.

        Raises:
            ServiceError: 404 when no record exists for *id*.
        """
        path = self.root / "topic" / f"{id_slug(id)}.json"
        logger.debug("GET topic %s options=%s (%s)", id, options, path)
        if not path.is_file():
            raise ServiceError(404, "Not Found", [{"reason": "notFound", "message": id}])

        record = json.loads(path.read_text(encoding="utf-8"))
        if "error" in record:
            raise ServiceError.from_response(record)
        return record

    def search(self, query: str, **options: Any) -> list[dict[str, Any]]:
        """Return the recorded results for *query* (``[]`` when none were recorded).

        Accepts a bare list or the API's ``{"result": [...]}`` envelope.
        A ``limit`` option truncates the list.
        """
        path = self.root / "search" / f"{query_slug(query)}.json"
        logger.debug("GET search %r options=%s (%s)", query, options, path)
        if not path.is_file():
            return []

        payload = json.loads(path.read_text(encoding="utf-8"))
        results = payload.get("result", []) if isinstance(payload, dict) else payload
        limit = options.get("limit")
        if limit is not None:
            results = results[: int(limit)]
        return results

    def image(self, id: str, **options: Any) -> Optional[bytes]:
        """Return the recorded image bytes for *id*, or ``None``."""
        directory = self.root / "image"
        if not directory.is_dir():
            return None
        for path in sorted(directory.glob(f"{id_slug(id)}.*")):
            logger.debug("GET image %s options=%s (%s)", id, options, path)
            return path.read_bytes()
        return None
