"""
api/routes/reservations.py
--------------------------
Reservation endpoints, scoped to the caller's societe.

PATCH /api/reservations/{id}/statut moves a reservation through its
lifecycle (EnAttente, Confirmee, EnCours, Terminee, Annulee).
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.models import StatutReservation
from boutique.schemas.base import MessageResponse
from boutique.schemas.reservation import (
    ReservationCreate,
    ReservationRead,
    ReservationStatutUpdate,
    ReservationUpdate,
)
from boutique.services.reservation_service import ReservationService

router = APIRouter(prefix="/api/reservations", tags=["Reservations"])


def _not_found(id_reservation: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Réservation avec l'ID {id_reservation} introuvable.",
    )


@router.get("", response_model=list[ReservationRead], summary="List reservations")
async def list_reservations(
    db: DbSession,
    id_societe: TenantId,
    statut: Optional[StatutReservation] = Query(None),
) -> list[ReservationRead]:
    return await ReservationService.list_reservations(db, id_societe, statut)


@router.get("/{id_reservation}", response_model=ReservationRead, summary="Get a reservation")
async def get_reservation(
    id_reservation: int, db: DbSession, id_societe: TenantId
) -> ReservationRead:
    reservation = await ReservationService.get_reservation(db, id_societe, id_reservation)
    if reservation is None:
        raise _not_found(id_reservation)
    return reservation


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reservation",
)
async def create_reservation(
    body: ReservationCreate, response: Response, db: DbSession, id_societe: TenantId
) -> ReservationRead:
    reservation = await ReservationService.create_reservation(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{reservation.id_reservation}"
    return reservation


@router.put("/{id_reservation}", response_model=ReservationRead, summary="Update a reservation")
async def update_reservation(
    id_reservation: int, body: ReservationUpdate, db: DbSession, id_societe: TenantId
) -> ReservationRead:
    reservation = await ReservationService.update_reservation(db, id_societe, id_reservation, body)
    if reservation is None:
        raise _not_found(id_reservation)
    return reservation


@router.delete(
    "/{id_reservation}", response_model=MessageResponse, summary="Delete a reservation"
)
async def delete_reservation(
    id_reservation: int, db: DbSession, id_societe: TenantId
) -> MessageResponse:
    if not await ReservationService.delete_reservation(db, id_societe, id_reservation):
        raise _not_found(id_reservation)
    return MessageResponse(message="Réservation supprimée avec succès.")


@router.patch(
    "/{id_reservation}/statut",
    response_model=ReservationRead,
    summary="Change a reservation's status",
)
async def update_reservation_status(
    id_reservation: int, body: ReservationStatutUpdate, db: DbSession, id_societe: TenantId
) -> ReservationRead:
    updated = await ReservationService.update_reservation_status(
        db, id_societe, id_reservation, body.statut
    )
    if not updated:
        raise _not_found(id_reservation)
    return await ReservationService.get_reservation(db, id_societe, id_reservation)
