"""
api/routes/paiements.py
-----------------------
Payment endpoints, scoped to the caller's societe.

Creating, moving or deleting a paiement also updates the id_paiement
back-reference of the reservations involved, in the same transaction.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.schemas.base import MessageResponse
from boutique.schemas.paiement import PaiementCreate, PaiementRead, PaiementUpdate
from boutique.services.paiement_service import PaiementService

router = APIRouter(prefix="/api/paiements", tags=["Paiements"])


def _not_found(id_paiement: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Paiement avec l'ID {id_paiement} introuvable.",
    )


@router.get("", response_model=list[PaiementRead], summary="List payments")
async def list_paiements(
    db: DbSession,
    id_societe: TenantId,
    id_reservation: Optional[int] = Query(None, alias="idReservation"),
) -> list[PaiementRead]:
    return await PaiementService.list_paiements(db, id_societe, id_reservation)


@router.get("/{id_paiement}", response_model=PaiementRead, summary="Get a payment")
async def get_paiement(id_paiement: int, db: DbSession, id_societe: TenantId) -> PaiementRead:
    paiement = await PaiementService.get_paiement(db, id_societe, id_paiement)
    if paiement is None:
        raise _not_found(id_paiement)
    return paiement


@router.post(
    "",
    response_model=PaiementRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record a payment for a reservation",
)
async def create_paiement(
    body: PaiementCreate, response: Response, db: DbSession, id_societe: TenantId
) -> PaiementRead:
    paiement = await PaiementService.create_paiement(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{paiement.id_paiement}"
    return paiement


@router.put("/{id_paiement}", response_model=PaiementRead, summary="Update a payment")
async def update_paiement(
    id_paiement: int, body: PaiementUpdate, db: DbSession, id_societe: TenantId
) -> PaiementRead:
    paiement = await PaiementService.update_paiement(db, id_societe, id_paiement, body)
    if paiement is None:
        raise _not_found(id_paiement)
    return paiement


@router.delete("/{id_paiement}", response_model=MessageResponse, summary="Delete a payment")
async def delete_paiement(id_paiement: int, db: DbSession, id_societe: TenantId) -> MessageResponse:
    if not await PaiementService.delete_paiement(db, id_societe, id_paiement):
        raise _not_found(id_paiement)
    return MessageResponse(message="Paiement supprimé avec succès.")
