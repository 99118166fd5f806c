"""
api/routes/tailles.py
---------------------
Size (taille) endpoints, scoped to the caller's societe.
"""

from fastapi import APIRouter, HTTPException, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.schemas.base import MessageResponse
from boutique.schemas.taille import TailleCreate, TailleRead, TailleUpdate
from boutique.services.taille_service import TailleService

router = APIRouter(prefix="/api/tailles", tags=["Tailles"])


def _not_found(id_taille: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Taille avec l'ID {id_taille} introuvable.",
    )


@router.get("", response_model=list[TailleRead], summary="List sizes")
async def list_tailles(db: DbSession, id_societe: TenantId) -> list[TailleRead]:
    return await TailleService.list_tailles(db, id_societe)


@router.get("/{id_taille}", response_model=TailleRead, summary="Get a size")
async def get_taille(id_taille: int, db: DbSession, id_societe: TenantId) -> TailleRead:
    taille = await TailleService.get_taille(db, id_societe, id_taille)
    if taille is None:
        raise _not_found(id_taille)
    return taille


@router.post(
    "",
    response_model=TailleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a size",
)
async def create_taille(
    body: TailleCreate, response: Response, db: DbSession, id_societe: TenantId
) -> TailleRead:
    taille = await TailleService.create_taille(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{taille.id_taille}"
    return taille


@router.put("/{id_taille}", response_model=TailleRead, summary="Update a size")
async def update_taille(
    id_taille: int, body: TailleUpdate, db: DbSession, id_societe: TenantId
) -> TailleRead:
    taille = await TailleService.update_taille(db, id_societe, id_taille, body)
    if taille is None:
        raise _not_found(id_taille)
    return taille


@router.delete("/{id_taille}", response_model=MessageResponse, summary="Delete a size")
async def delete_taille(id_taille: int, db: DbSession, id_societe: TenantId) -> MessageResponse:
    if not await TailleService.delete_taille(db, id_societe, id_taille):
        raise _not_found(id_taille)
    return MessageResponse(message="Taille supprimée avec succès.")
