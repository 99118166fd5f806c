"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication and tenancy.

Flow:
  1. OAuth2PasswordBearer extracts the Bearer token from the Authorization header.
  2. get_token_claims validates and parses the JWT (no DB round-trip).
  3. get_tenant_context turns the claims into a TenantContext; routes pass
     its id_societe to the services explicitly.
  4. get_current_user additionally loads the User row (login, /me).

A token without an id_societe claim still authenticates; the tenant-scoped
services reject it with 401 MissingTenantError.
"""

from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.logging import get_logger
from boutique.core.security import decode_access_token
from boutique.core.tenant import TenantContext, resolve_tenant_context
from boutique.db.session import get_db
from boutique.models import User
from boutique.services.user_service import UserService

logger = get_logger(__name__)

# tokenUrl must match the login endpoint path
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Impossible de valider les identifiants.",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_token_claims(
    token: Annotated[str, Depends(oauth2_scheme)],
) -> Dict[str, Any]:
    """Decode the JWT. Raises 401 if it is invalid, expired, or has no subject."""
    try:
        claims = decode_access_token(token)
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise _CREDENTIALS_EXCEPTION
    if not claims.get("sub"):
        raise _CREDENTIALS_EXCEPTION
    return claims


async def get_tenant_context(
    claims: Annotated[Dict[str, Any], Depends(get_token_claims)],
) -> TenantContext:
    context = resolve_tenant_context(claims)
    if context is None:
        raise _CREDENTIALS_EXCEPTION
    return context


async def get_tenant_id(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
) -> Optional[int]:
    return context.id_societe


async def get_current_user(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Load the User named by the token.
    Raises 401 if the user no longer exists or has been deactivated.
    """
    user = None
    if context.id_utilisateur is not None:
        user = await UserService.get_by_id(db, context.id_utilisateur)

    if user is None or not user.actif:
        logger.warning("User from valid JWT not usable", id_utilisateur=context.id_utilisateur)
        raise _CREDENTIALS_EXCEPTION

    return user


DbSession = Annotated[AsyncSession, Depends(get_db)]
TenantId = Annotated[Optional[int], Depends(get_tenant_id)]
