"""Relying-party id resolution for WebAuthn ceremonies.

The RP id binds a credential to a web origin. Browsers reject the ceremony
when the id is neither the page's host nor a registrable parent of it, so the
value is derived from what the caller's browser believes it is talking to.
"""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import urlsplit

DEFAULT_RP_ID = "localhost"
_LOOPBACK_HOSTS = {"localhost", "127.0.0.1"}


def _normalise(hostname: str) -> str:
    hostname = hostname.lower()
    if hostname in _LOOPBACK_HOSTS:
        return hostname
    if hostname.startswith("www."):
        return hostname[len("www."):]
    return hostname


def _hostname_from_origin(origin: Optional[str]) -> Optional[str]:
    if not origin or origin == "null":
        return None
    try:
        hostname = urlsplit(origin).hostname
    except ValueError:
        return None
    return hostname or None


def _hostname_from_host(host: Optional[str]) -> Optional[str]:
    if not host:
        return None
    try:
        hostname = urlsplit(f"//{host.strip()}").hostname
    except ValueError:
        return None
    return hostname or None


def resolve_rp_id(headers: Mapping[str, str], override: Optional[str] = None) -> str:
    """Return the RP id for a request.

    Priority: configured override, Origin hostname, Host hostname, ``localhost``.
    """
    if override:
        return override

    hostname = _hostname_from_origin(headers.get("origin"))
    if hostname is None:
        hostname = _hostname_from_host(headers.get("host"))
    if hostname is None:
        return DEFAULT_RP_ID
    return _normalise(hostname)


__all__ = ["DEFAULT_RP_ID", "resolve_rp_id"]
