"""
Request Context Helpers

Derives caller information (client IP, identity) from incoming requests.

Usage:
    from utils.request_context import get_client_ip, build_caller_identity

    ip = get_client_ip(request)
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional

from fastapi import Request

from config.constants import LOOPBACK_ADDRESSES, LOCAL_DEV_IP_MARKER

# Proxy headers in priority order. X-Forwarded-For may hold a chain; the
# first hop is the original client.
IP_HEADERS = (
    "x-forwarded-for",
    "cf-connecting-ip",  # Cloudflare
    "x-real-ip",
    "x-client-ip",
)


def resolve_client_ip(headers: Mapping[str, str], fallback: Optional[str] = None) -> str:
    """
    Resolve the client IP from proxy headers.

    Args:
        headers: Request headers (case-insensitive mapping or lower-cased dict)
        fallback: Address of the direct peer, used when no header is present

    Returns:
        str: Client IP, "localhost-dev" for loopback, "unknown" if nothing found
    """
    ip_address = None

    for header in IP_HEADERS:
        value = headers.get(header)
        if value:
            ip_address = value.split(",")[0].strip() if header == "x-forwarded-for" else value.strip()
            if ip_address:
                break

    if not ip_address:
        ip_address = fallback or "unknown"

    if ip_address in LOOPBACK_ADDRESSES:
        return LOCAL_DEV_IP_MARKER

    return ip_address


def get_client_ip(request: Request) -> str:
    """Get client IP address from a FastAPI request."""
    peer = request.client.host if request.client else None
    return resolve_client_ip(request.headers, fallback=peer)


@dataclass
class CallerIdentity:
    """Who is calling, as far as the API can tell. Authentication happens elsewhere."""
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    ip_address: Optional[str] = None
    session_id: Optional[str] = None
    user_agent: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_caller_identity(
    request: Request,
    user_id: Optional[str] = None,
    user_email: Optional[str] = None,
    session_id: Optional[str] = None,
) -> CallerIdentity:
    """Assemble a CallerIdentity from query parameters and request headers."""
    return CallerIdentity(
        user_id=user_id or None,
        user_email=user_email or None,
        ip_address=get_client_ip(request),
        session_id=session_id or request.headers.get("x-session-id") or None,
        user_agent=request.headers.get("user-agent") or None,
    )
