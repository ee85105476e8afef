"""Pinned front-end asset bundles and a versionless locator.

Templates reference assets as `/webjars/<name>/<path>` without a version;
the locator resolves that path against the pinned bundle version so the
version lives in one place.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_CDN_BASE = "https://cdn.jsdelivr.net/npm"


class WebJar:
    """A versioned front-end library served from a CDN."""

    def __init__(self, name: str, version: str, cdn_base: str = DEFAULT_CDN_BASE):
        self.name = name
        self.version = version
        self.cdn_base = cdn_base.rstrip("/")

    def url_for(self, path: str) -> str:
        return f"{self.cdn_base}/{self.name}@{self.version}/{path}"

    def __repr__(self) -> str:
        return f"WebJar({self.name!r}, {self.version!r})"


WEBJARS: Dict[str, WebJar] = {
    "jquery": WebJar("jquery", "3.6.1"),
    "bootstrap": WebJar("bootstrap", "4.6.2"),
}


def _clean_path(path: str) -> str:
    parts = [p for p in (path or "").replace("\\", "/").split("/") if p]
    if not parts:
        raise ValueError("empty asset path")
    if any(p in (".", "..") for p in parts):
        raise ValueError(f"invalid asset path: {path}")
    return "/".join(parts)


def locate(name: str, path: str) -> str:
    """Return the versioned URL of `path` inside bundle `name`.

    A leading segment equal to the pinned version is dropped, so both
    `dist/jquery.min.js` and `3.6.1/dist/jquery.min.js` resolve to the same
    file. Raises `KeyError` for unknown bundles.
    """
    jar = WEBJARS[name.lower()]
    cleaned = _clean_path(path)
    head, _, rest = cleaned.partition("/")
    if head == jar.version:
        if not rest:
            raise ValueError(f"invalid asset path: {path}")
        cleaned = rest
    return jar.url_for(cleaned)


def asset_url(name: str, path: str) -> str:
    """Local versionless URL used by templates."""
    if name.lower() not in WEBJARS:
        raise KeyError(name)
    return f"/webjars/{name.lower()}/{_clean_path(path)}"
