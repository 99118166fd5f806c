"""
core/tenant.py
--------------
Tenant context resolution.

The caller's tenant is read from the decoded token claims once, at the
edge (see dependencies.get_tenant_context), and then handed to every
service call as an explicit `id_societe` argument. Services never look at
the request themselves.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from boutique.core.exceptions import MissingTenantError
from boutique.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TenantContext:
    id_societe: Optional[int]
    id_utilisateur: Optional[int]
    login: Optional[str]


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def resolve_tenant_context(claims: Optional[Mapping[str, Any]]) -> Optional[TenantContext]:
    """
    Build a TenantContext from token claims.

    Returns None for an unauthenticated caller (no claims). A malformed or
    missing id_societe claim yields a context whose id_societe is None.
    """
    if not claims:
        return None
    return TenantContext(
        id_societe=_as_int(claims.get("id_societe")),
        id_utilisateur=_as_int(claims.get("sub")),
        login=claims.get("login"),
    )


def require_tenant(id_societe: Optional[int], action: str = "operation") -> int:
    """Return the tenant id or fail the operation before any query runs."""
    if id_societe is None:
        logger.warning("Missing IdSociete in caller identity", action=action)
        raise MissingTenantError()
    return id_societe
