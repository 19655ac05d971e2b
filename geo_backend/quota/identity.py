"""Resolve the identity string a caller is rate-limited under.

The identity is the client's IP address as reported by the proxy chain in
front of the app. Forwarded headers are trusted as-is: a caller can spoof
them, which is an accepted limitation of this best-effort limiter.
"""
from __future__ import annotations

from typing import Mapping, Optional

from starlette.requests import Request

UNKNOWN_IDENTITY = "unknown"

FORWARDED_FOR_HEADER = "x-forwarded-for"
REAL_IP_HEADER = "x-real-ip"
CF_CONNECTING_IP_HEADER = "cf-connecting-ip"  # Cloudflare


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup; empty values count as absent."""
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                value = candidate
                break
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def resolve_client_identity(headers: Mapping[str, str], peer: Optional[str] = None) -> str:
    """Return the identity for a request's headers and peer address.

    First match wins: ``X-Forwarded-For`` (first hop), ``X-Real-IP``,
    ``CF-Connecting-IP``, the socket peer, then ``"unknown"``.
    """
    forwarded = _header(headers, FORWARDED_FOR_HEADER)
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = _header(headers, REAL_IP_HEADER)
    if real_ip:
        return real_ip

    cf_ip = _header(headers, CF_CONNECTING_IP_HEADER)
    if cf_ip:
        return cf_ip

    if peer:
        return peer

    return UNKNOWN_IDENTITY


def client_identity_from_request(request: Request) -> str:
    """Resolve the identity of a Starlette/FastAPI request.

    Also used as the slowapi ``key_func`` so burst limiting and the daily
    quota count the same caller.
    """
    peer = request.client.host if request.client else None
    return resolve_client_identity(request.headers, peer)


__all__ = [
    "UNKNOWN_IDENTITY",
    "resolve_client_identity",
    "client_identity_from_request",
]
