"""
api/routes/roles.py
-------------------
Role endpoints, scoped to the caller's societe.

GET /api/roles/{id}/utilisateurs lists the users holding a role.
"""

from fastapi import APIRouter, HTTPException, Query, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.schemas.base import MessageResponse
from boutique.schemas.role import RoleCreate, RoleRead, RoleUpdate
from boutique.schemas.user import UserRead
from boutique.services.role_service import RoleService

router = APIRouter(prefix="/api/roles", tags=["Roles"])


def _not_found(id_role: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Rôle avec l'ID {id_role} introuvable.",
    )


@router.get("", response_model=list[RoleRead], summary="List roles")
async def list_roles(
    db: DbSession,
    id_societe: TenantId,
    include_inactive: bool = Query(False, alias="includeInactive"),
) -> list[RoleRead]:
    return await RoleService.list_roles(db, id_societe, include_inactive)


@router.get("/{id_role}", response_model=RoleRead, summary="Get a role")
async def get_role(id_role: int, db: DbSession, id_societe: TenantId) -> RoleRead:
    role = await RoleService.get_role(db, id_societe, id_role)
    if role is None:
        raise _not_found(id_role)
    return role


@router.post(
    "",
    response_model=RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a role",
)
async def create_role(
    body: RoleCreate, response: Response, db: DbSession, id_societe: TenantId
) -> RoleRead:
    role = await RoleService.create_role(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{role.id_role}"
    return role


@router.put("/{id_role}", response_model=RoleRead, summary="Update a role")
async def update_role(
    id_role: int, body: RoleUpdate, db: DbSession, id_societe: TenantId
) -> RoleRead:
    role = await RoleService.update_role(db, id_societe, id_role, body)
    if role is None:
        raise _not_found(id_role)
    return role


@router.delete("/{id_role}", response_model=MessageResponse, summary="Delete a role")
async def delete_role(id_role: int, db: DbSession, id_societe: TenantId) -> MessageResponse:
    if not await RoleService.delete_role(db, id_societe, id_role):
        raise _not_found(id_role)
    return MessageResponse(message="Rôle supprimé avec succès.")


@router.patch("/{id_role}/actif", response_model=RoleRead, summary="Toggle a role's active flag")
async def toggle_role_status(id_role: int, db: DbSession, id_societe: TenantId) -> RoleRead:
    if not await RoleService.toggle_role_status(db, id_societe, id_role):
        raise _not_found(id_role)
    return await RoleService.get_role(db, id_societe, id_role)


@router.get(
    "/{id_role}/utilisateurs",
    response_model=list[UserRead],
    summary="List the users holding a role",
)
async def list_users_by_role(id_role: int, db: DbSession, id_societe: TenantId) -> list[UserRead]:
    users = await RoleService.list_users_by_role(db, id_societe, id_role)
    if users is None:
        raise _not_found(id_role)
    return users
