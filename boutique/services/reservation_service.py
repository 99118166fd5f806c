"""
services/reservation_service.py
-------------------------------
Business logic for reservations.

A reservation belongs to a Client of the same societe and may point at the
Paiement settling it (id_paiement). Paiements.id_reservation stays the
authoritative link; linking a paiement from this side re-points it and
clears the back-reference of the reservation it used to settle.

All writes are flushed only; get_db commits the request as one unit.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from boutique.core.exceptions import ConflictError, ValidationFailed
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Client, Paiement, Reservation, StatutReservation
from boutique.schemas.reservation import (
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)

logger = get_logger(__name__)


class ReservationService:

    @staticmethod
    async def list_reservations(
        db: AsyncSession,
        id_societe: Optional[int],
        statut: Optional[StatutReservation] = None,
    ) -> list[ReservationRead]:
        id_societe = require_tenant(id_societe, "list_reservations")
        query = (
            select(Reservation)
            .options(selectinload(Reservation.client), selectinload(Reservation.paiement))
            .where(Reservation.id_societe == id_societe)
        )
        if statut is not None:
            query = query.where(Reservation.statut_reservation == statut)

        result = await db.execute(
            query.order_by(Reservation.date_reservation.desc(), Reservation.id_reservation.desc())
        )
        return [ReservationRead.model_validate(r) for r in result.scalars().all()]

    @staticmethod
    async def get_reservation(
        db: AsyncSession, id_societe: Optional[int], id_reservation: int
    ) -> Optional[ReservationRead]:
        id_societe = require_tenant(id_societe, "get_reservation")
        reservation = await ReservationService._load(db, id_societe, id_reservation)
        return None if reservation is None else ReservationRead.model_validate(reservation)

    @staticmethod
    async def create_reservation(
        db: AsyncSession, id_societe: Optional[int], data: ReservationCreate
    ) -> ReservationRead:
        """
        Create a reservation.

        Raises:
            ValidationFailed: date_debut is not before date_fin, or the client
                or paiement does not exist in the caller's societe.
        """
        id_societe = require_tenant(id_societe, "create_reservation")
        ReservationService._check_dates(data.date_debut, data.date_fin)
        await ReservationService._ensure_client(db, id_societe, data.id_client)

        paiement = None
        if data.id_paiement is not None:
            paiement = await ReservationService._ensure_paiement(db, id_societe, data.id_paiement)

        reservation = Reservation(
            id_societe=id_societe, **data.model_dump(exclude={"id_paiement"})
        )
        db.add(reservation)
        await db.flush()

        if paiement is not None:
            await ReservationService._link_paiement(db, reservation, paiement)

        logger.info(
            "Reservation created",
            id_reservation=reservation.id_reservation,
            id_client=reservation.id_client,
            id_societe=id_societe,
        )
        return ReservationRead.model_validate(
            await ReservationService._load(db, id_societe, reservation.id_reservation)
        )

    @staticmethod
    async def update_reservation(
        db: AsyncSession,
        id_societe: Optional[int],
        id_reservation: int,
        data: ReservationUpdate,
    ) -> Optional[ReservationRead]:
        """
        Apply a partial update. An explicit null id_paiement only clears this
        reservation's back-reference; the Paiement row is left untouched.
        """
        id_societe = require_tenant(id_societe, "update_reservation")
        reservation = await ReservationService._get_scoped(db, id_societe, id_reservation)
        if reservation is None:
            return None

        changes: Dict[str, Any] = data.patch()
        ReservationService._check_dates(
            changes.get("date_debut", reservation.date_debut),
            changes.get("date_fin", reservation.date_fin),
        )
        if "id_client" in changes:
            await ReservationService._ensure_client(db, id_societe, changes["id_client"])

        paiement = None
        if changes.get("id_paiement") is not None:
            paiement = await ReservationService._ensure_paiement(
                db, id_societe, changes["id_paiement"]
            )
        id_paiement_given = "id_paiement" in changes
        changes.pop("id_paiement", None)

        for field, value in changes.items():
            setattr(reservation, field, value)

        if paiement is not None:
            await ReservationService._link_paiement(db, reservation, paiement)
        elif id_paiement_given:
            reservation.id_paiement = None
        await db.flush()

        logger.info("Reservation updated", id_reservation=id_reservation, fields=sorted(data.patch()))
        return ReservationRead.model_validate(
            await ReservationService._load(db, id_societe, id_reservation)
        )

    @staticmethod
    async def delete_reservation(
        db: AsyncSession, id_societe: Optional[int], id_reservation: int
    ) -> bool:
        id_societe = require_tenant(id_societe, "delete_reservation")
        reservation = await ReservationService._get_scoped(db, id_societe, id_reservation)
        if reservation is None:
            return False

        has_paiement = await db.scalar(
            select(Paiement.id_paiement)
            .where(Paiement.id_reservation == id_reservation)
            .limit(1)
        )
        if has_paiement is not None:
            raise ConflictError(
                "Impossible de supprimer une réservation qui a un paiement. "
                "Supprimez d'abord le paiement."
            )

        await db.delete(reservation)
        await db.flush()

        logger.info("Reservation deleted", id_reservation=id_reservation, id_societe=id_societe)
        return True

    @staticmethod
    async def update_reservation_status(
        db: AsyncSession,
        id_societe: Optional[int],
        id_reservation: int,
        statut: StatutReservation,
    ) -> bool:
        id_societe = require_tenant(id_societe, "update_reservation_status")
        reservation = await ReservationService._get_scoped(db, id_societe, id_reservation)
        if reservation is None:
            return False

        previous = reservation.statut_reservation
        reservation.statut_reservation = statut
        await db.flush()

        logger.info(
            "Reservation status changed",
            id_reservation=id_reservation,
            previous=previous.value,
            statut=statut.value,
        )
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    def _check_dates(date_debut: datetime, date_fin: datetime) -> None:
        if date_debut >= date_fin:
            raise ValidationFailed("La date de début doit être antérieure à la date de fin.")

    @staticmethod
    async def _get_scoped(
        db: AsyncSession, id_societe: int, id_reservation: int
    ) -> Optional[Reservation]:
        result = await db.execute(
            select(Reservation).where(
                Reservation.id_reservation == id_reservation,
                Reservation.id_societe == id_societe,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _load(
        db: AsyncSession, id_societe: int, id_reservation: int
    ) -> Optional[Reservation]:
        result = await db.execute(
            select(Reservation)
            .options(selectinload(Reservation.client), selectinload(Reservation.paiement))
            .where(
                Reservation.id_reservation == id_reservation,
                Reservation.id_societe == id_societe,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _ensure_client(db: AsyncSession, id_societe: int, id_client: int) -> None:
        found = await db.scalar(
            select(Client.id_client).where(
                Client.id_client == id_client, Client.id_societe == id_societe
            )
        )
        if found is None:
            raise ValidationFailed(f"Le client {id_client} n'existe pas.")

    @staticmethod
    async def _ensure_paiement(db: AsyncSession, id_societe: int, id_paiement: int) -> Paiement:
        result = await db.execute(
            select(Paiement).where(
                Paiement.id_paiement == id_paiement, Paiement.id_societe == id_societe
            )
        )
        paiement = result.scalar_one_or_none()
        if paiement is None:
            raise ValidationFailed(f"Le paiement {id_paiement} n'existe pas.")
        return paiement

    @staticmethod
    async def _link_paiement(db: AsyncSession, reservation: Reservation, paiement: Paiement) -> None:
        """Make `paiement` the one settling `reservation`, on both sides."""
        if reservation.id_paiement not in (None, paiement.id_paiement):
            raise ConflictError("Cette réservation a déjà un paiement.")
        other = await db.scalar(
            select(Paiement.id_paiement).where(
                Paiement.id_reservation == reservation.id_reservation,
                Paiement.id_paiement != paiement.id_paiement,
            ).limit(1)
        )
        if other is not None:
            raise ConflictError("Cette réservation a déjà un paiement.")

        previous = paiement.id_reservation
        if previous != reservation.id_reservation:
            await db.execute(
                update(Reservation)
                .where(
                    Reservation.id_reservation == previous,
                    Reservation.id_paiement == paiement.id_paiement,
                )
                .values(id_paiement=None)
                .execution_options(synchronize_session="fetch")
            )
            paiement.id_reservation = reservation.id_reservation

        reservation.id_paiement = paiement.id_paiement
        await db.flush()
