"""Basic-auth and client IP allow-list checks applied to every route."""

from __future__ import annotations

import ipaddress
import secrets
from typing import Iterable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from api.dependencies import get_api_config
from configs.api_config import ApiConfig


basic_auth = HTTPBasic(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Basic"},
    )


def require_basic_auth(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    config: ApiConfig = Depends(get_api_config),
) -> str:
    """Accept the request only when the credentials match the configured pair.

    :return: The authenticated user name.
    :raises HTTPException: 401 on missing or wrong credentials.
    """
    if credentials is None:
        raise _unauthorized()

    user_ok = secrets.compare_digest(credentials.username.encode("utf-8"), config.username.encode("utf-8"))
    pass_ok = secrets.compare_digest(credentials.password.encode("utf-8"), config.password.encode("utf-8"))
    if not (user_ok and pass_ok):
        raise _unauthorized()
    return credentials.username


def client_ip(request: Request) -> str:
    """Client address from the connection, then ``X-Forwarded-For``, then ``X-Real-IP``."""
    if request.client and request.client.host:
        return request.client.host
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP", "").strip()


def ip_allowed(ip: str, allowed: Iterable[str]) -> bool:
    """Return whether ``ip`` equals an entry of ``allowed`` or falls in one of its CIDRs."""
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        address = None

    for entry in allowed:
        if entry == ip:
            return True
        if address is None or "/" not in entry:
            continue
        try:
            if address in ipaddress.ip_network(entry, strict=False):
                return True
        except ValueError:
            continue
    return False


def require_allowed_ip(request: Request, config: ApiConfig = Depends(get_api_config)) -> None:
    """Reject clients outside ``DM_ALLOWED_IPS``; a no-op when the list is empty.

    :raises HTTPException: 401 for clients that are not allowed.
    """
    if not config.allowed_ips:
        return
    ip = client_ip(request)
    if not ip_allowed(ip, config.allowed_ips):
        service = getattr(request.app.state, "metrics_service", None)
        if service is not None:
            service.logger.error(f"Unauthorized client IP: {ip}")
        raise _unauthorized()
