"""
api/routes/users.py
-------------------
User management within the caller's societe.

A user belongs to a societe through its role, so the role given on
creation must be one of the caller's societe roles.
"""

from fastapi import APIRouter, HTTPException, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.schemas.user import UserCreate, UserRead
from boutique.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=list[UserRead], summary="List users of the current societe")
async def list_users(db: DbSession, id_societe: TenantId) -> list[UserRead]:
    return await UserService.list_users(db, id_societe)


@router.get("/{id_utilisateur}", response_model=UserRead, summary="Get a user")
async def get_user(id_utilisateur: int, db: DbSession, id_societe: TenantId) -> UserRead:
    user = await UserService.get_user(db, id_societe, id_utilisateur)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Utilisateur avec l'ID {id_utilisateur} introuvable.",
        )
    return user


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user in the current societe",
)
async def create_user(
    body: UserCreate, response: Response, db: DbSession, id_societe: TenantId
) -> UserRead:
    user = await UserService.create_user(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{user.id_utilisateur}"
    return user
