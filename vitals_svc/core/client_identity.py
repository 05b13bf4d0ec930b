"""
Client identification for the anonymous, one-profile-per-client model.

A client is keyed by its network address. Requests arriving from loopback
(or with no address at all) cannot be told apart that way, so they are
keyed by a random session cookie instead.

Resolution order for the address:
    1. first entry of X-Forwarded-For
    2. X-Real-IP
    3. the socket peer address

Usage in routers:
    @router.get("/profile")
    def read_profile(client_id: str = Depends(get_client_id)):
        ...
"""
import logging
import secrets
from typing import Optional

from fastapi import Request, Response

from core.config import SESSION_COOKIE_NAME
from core.logging_config import set_client_id

logger = logging.getLogger(__name__)

LOOPBACK_ADDRESSES = frozenset({"::1", "127.0.0.1", "::ffff:127.0.0.1", "localhost"})
IPV4_MAPPED_PREFIX = "::ffff:"

# Max age of the session cookie: one year
SESSION_COOKIE_MAX_AGE = 365 * 24 * 60 * 60


def resolve_client_address(request: Request) -> Optional[str]:
    """Best guess at the caller's address, honouring proxy headers."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    if request.client is not None:
        return request.client.host
    return None


def client_id_from_address(address: Optional[str]) -> Optional[str]:
    """
    Map an address to a client id, or None when the address is not usable.

    >>> client_id_from_address("::ffff:203.0.113.7")
    'ip_203.0.113.7'
    >>> client_id_from_address("127.0.0.1") is None
    True
    """
    if not address or address in LOOPBACK_ADDRESSES:
        return None
    if address.startswith(IPV4_MAPPED_PREFIX):
        address = address[len(IPV4_MAPPED_PREFIX):]
    return f"ip_{address}"


def new_session_id() -> str:
    return f"session_{secrets.token_hex(16)}"


async def get_client_id(request: Request, response: Response) -> str:
    """
    FastAPI dependency resolving the client id for the current request.

    Sets the session cookie on the response when a loopback client arrives
    without one. The id is also attached to the request's log lines.
    """
    client_id = client_id_from_address(resolve_client_address(request))

    if client_id is None:
        client_id = request.cookies.get(SESSION_COOKIE_NAME)
        if not client_id or not client_id.startswith("session_"):
            client_id = new_session_id()
            response.set_cookie(
                SESSION_COOKIE_NAME,
                client_id,
                max_age=SESSION_COOKIE_MAX_AGE,
                httponly=True,
                samesite="lax",
            )
            logger.debug("Issued new session cookie")

    set_client_id(client_id)
    return client_id
