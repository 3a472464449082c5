"""
FastAPI dependencies shared by the routers.

Tests replace `get_store` and `get_credential_check` through
`app.dependency_overrides`.
"""

from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, Header, HTTPException, Request

from repositories.client import create_store, get_settings
from repositories.kv_store import KeyValueStore
from services.admin_service import (
    AuthorizationError,
    CredentialCheck,
    credential_check_for,
    require_admin,
)


@lru_cache(maxsize=1)
def get_store() -> KeyValueStore:
    """Process-wide store; the store itself is the only shared state."""
    return create_store(get_settings())


def get_credential_check() -> CredentialCheck:
    return credential_check_for(get_settings().admin_password)


def require_admin_credentials(
    x_admin_password: Optional[str] = Header(None),
    check: CredentialCheck = Depends(get_credential_check),
) -> None:
    try:
        require_admin(check, x_admin_password)
    except AuthorizationError as e:
        raise HTTPException(status_code=401, detail=str(e))


async def read_json_body(request: Request) -> Any:
    """
    Request body parsed as JSON, or None when it is empty or not valid JSON.

    Lets a handler decide when a malformed body matters, e.g. only after it
    has checked that the addressed lead exists.
    """
    try:
        return await request.json()
    except ValueError:
        return None
