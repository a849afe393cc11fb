"""JSON persistence for the Scholar session cookie store."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from requests.cookies import RequestsCookieJar

LOGGER = logging.getLogger(__name__)


def load_cookies(path: str | Path) -> RequestsCookieJar:
    """Load cookies saved by ``save_cookies``.

    A missing or unreadable file yields an empty jar. Each entry is an object with
    ``name``, ``value`` and optional ``domain``/``path`` keys.
    """
    jar = RequestsCookieJar()
    cookie_path = Path(path)
    if not cookie_path.exists():
        LOGGER.info("Cookie file %s not found, starting with an empty cookie store", cookie_path)
        return jar

    try:
        entries = json.loads(cookie_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        LOGGER.warning("Cookie file %s is not valid JSON, starting with an empty cookie store: %s", cookie_path, exc)
        return jar
    if not isinstance(entries, list):
        LOGGER.warning("Cookie file %s is not a JSON list, starting with an empty cookie store", cookie_path)
        return jar

    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry or "value" not in entry:
            LOGGER.warning("Skipping malformed cookie entry in %s: %r", cookie_path, entry)
            continue
        jar.set(
            entry["name"],
            entry["value"],
            domain=entry.get("domain", ""),
            path=entry.get("path", "/"),
        )

    LOGGER.info("Loaded %s cookies from %s", len(jar), cookie_path)
    return jar


def save_cookies(jar: RequestsCookieJar, path: str | Path) -> None:
    """Write the jar's cookies to ``path`` as a JSON list."""
    entries = [
        {"name": cookie.name, "value": cookie.value, "domain": cookie.domain, "path": cookie.path}
        for cookie in jar
    ]
    cookie_path = Path(path)
    cookie_path.parent.mkdir(parents=True, exist_ok=True)
    cookie_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
