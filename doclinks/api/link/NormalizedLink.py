"""Canonical form of a link target, used as cache and in-flight key."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal
from urllib.parse import unquote, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


class MalformedTargetError(ValueError):
    """Raised when a target cannot be turned into a NormalizedLink."""


@dataclass(frozen=True)
class NormalizedLink:
    """Canonical link target.

    ``key`` is the normalized URL for remote targets and the ``file://`` URI
    of the absolute path for local targets. ``scheme`` is kept for targets
    that are neither (``mailto:``, ``ftp:`` ...), which are never fetched.
    """

    key: str
    kind: Literal["remote", "local", "other"]
    path: Path | None = None

    @property
    def scheme(self) -> str:
        return self.key.split(":", 1)[0].lower()


def _normalize_remote(raw: str) -> NormalizedLink:
    parts = urlsplit(raw)
    scheme = parts.scheme.lower()
    if not parts.hostname:
        raise MalformedTargetError(f"Missing host in {raw!r}")

    host = parts.hostname.lower()
    try:
        port = parts.port
    except ValueError as e:
        raise MalformedTargetError(f"Invalid port in {raw!r}") from e

    netloc = host if port in (None, _DEFAULT_PORTS.get(scheme)) else f"{host}:{port}"
    if parts.username:
        netloc = f"{parts.username}@{netloc}"
    path = parts.path or "/"
    return NormalizedLink(key=urlunsplit((scheme, netloc, path, parts.query, "")), kind="remote")


def _normalize_local(raw: str, source_document: Path, base_dir: Path) -> NormalizedLink:
    target = raw.split("#", 1)[0].split("?", 1)[0]
    target = unquote(target)
    if target.startswith("/"):
        resolved = base_dir / target.lstrip("/")
    elif target:
        resolved = source_document.parent / target
    else:
        resolved = source_document
    # Collapse ".." without following symlinks
    resolved = Path(*_collapse(resolved.absolute().parts))
    return NormalizedLink(key=resolved.as_uri(), kind="local", path=resolved)


def _collapse(parts: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for part in parts:
        if part == "..":
            if len(out) > 1:
                out.pop()
        elif part != ".":
            out.append(part)
    return out


def normalize_link(raw_target: str, source_document: Path, base_dir: Path) -> NormalizedLink:
    """Normalize a raw target found in ``source_document``.

    Relative paths resolve against the document's directory; root-relative
    paths (``/docs/x.md``) resolve against ``base_dir``.

    Raises:
        MalformedTargetError: If an http(s) target has no usable host
    """
    raw = raw_target.strip()
    parts = urlsplit(raw)
    scheme = parts.scheme.lower()

    if scheme in ("http", "https"):
        return _normalize_remote(raw)
    if not scheme and parts.netloc:
        # Protocol-relative "//host/path"
        return _normalize_remote(f"https:{raw}")
    if scheme == "file":
        file_path = Path(unquote(parts.path))
        if not file_path.is_absolute():
            raise MalformedTargetError(f"file URI must be absolute: {raw!r}")
        return NormalizedLink(key=file_path.as_uri(), kind="local", path=file_path)
    # One-letter schemes are Windows drive letters, not URL schemes
    if scheme and len(scheme) > 1:
        return NormalizedLink(key=raw, kind="other")
    return _normalize_local(raw, source_document, base_dir)
