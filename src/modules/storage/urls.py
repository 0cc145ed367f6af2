"""Public URL derivation for stored objects."""

from __future__ import annotations

from urllib.parse import quote, urlsplit, urlunsplit

LOOPBACK_HOSTS = frozenset({"127.0.0.1", "localhost", "::1", "0.0.0.0"})


def build_public_url(
    base_url: str, bucket: str, path: str, request_host: str | None = None
) -> str:
    """Join ``base_url``/``bucket``/``path`` into a public object URL.

    When the base points at a loopback host (local storage emulator) and the
    current request's hostname is known, the loopback host is swapped for it so
    that other devices on the network can load the image.
    """
    url = f"{base_url.rstrip('/')}/{bucket}/{quote(path.lstrip('/'))}"
    if request_host:
        url = replace_loopback_host(url, request_host)
    return url


def replace_loopback_host(url: str, request_host: str) -> str:
    parts = urlsplit(url)
    if parts.hostname not in LOOPBACK_HOSTS:
        return url
    if request_host in LOOPBACK_HOSTS:
        return url
    # Bare IPv6 hostnames need brackets inside a netloc
    host = f"[{request_host}]" if ":" in request_host else request_host
    netloc = f"{host}:{parts.port}" if parts.port else host
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
