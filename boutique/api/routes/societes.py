"""
api/routes/societes.py
----------------------
Societe (tenant) management.

Societes are the tenants themselves, so these endpoints are not scoped by
the caller's id_societe; they still require a valid token.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from boutique.dependencies import DbSession, get_tenant_context
from boutique.schemas.base import MessageResponse
from boutique.schemas.societe import SocieteCreate, SocieteRead, SocieteUpdate
from boutique.services.societe_service import SocieteService

router = APIRouter(
    prefix="/api/societes",
    tags=["Societes"],
    dependencies=[Depends(get_tenant_context)],
)


def _not_found(id_societe: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Société avec l'ID {id_societe} introuvable.",
    )


@router.get("", response_model=list[SocieteRead], summary="List societes")
async def list_societes(
    db: DbSession,
    include_inactive: bool = Query(False, alias="includeInactive"),
) -> list[SocieteRead]:
    return await SocieteService.list_societes(db, include_inactive)


@router.get("/{id_societe}", response_model=SocieteRead, summary="Get a societe")
async def get_societe(id_societe: int, db: DbSession) -> SocieteRead:
    societe = await SocieteService.get_societe(db, id_societe)
    if societe is None:
        raise _not_found(id_societe)
    return societe


@router.post(
    "",
    response_model=SocieteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a societe",
)
async def create_societe(body: SocieteCreate, response: Response, db: DbSession) -> SocieteRead:
    societe = await SocieteService.create_societe(db, body)
    response.headers["Location"] = f"{router.prefix}/{societe.id_societe}"
    return societe


@router.put("/{id_societe}", response_model=SocieteRead, summary="Update a societe")
async def update_societe(id_societe: int, body: SocieteUpdate, db: DbSession) -> SocieteRead:
    societe = await SocieteService.update_societe(db, id_societe, body)
    if societe is None:
        raise _not_found(id_societe)
    return societe


@router.delete("/{id_societe}", response_model=MessageResponse, summary="Delete a societe")
async def delete_societe(id_societe: int, db: DbSession) -> MessageResponse:
    if not await SocieteService.delete_societe(db, id_societe):
        raise _not_found(id_societe)
    return MessageResponse(message="Société supprimée avec succès.")


@router.patch(
    "/{id_societe}/actif",
    response_model=SocieteRead,
    summary="Toggle a societe's active flag",
)
async def toggle_societe_status(id_societe: int, db: DbSession) -> SocieteRead:
    if not await SocieteService.toggle_societe_status(db, id_societe):
        raise _not_found(id_societe)
    return await SocieteService.get_societe(db, id_societe)
