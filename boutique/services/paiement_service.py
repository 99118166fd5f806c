"""
services/paiement_service.py
----------------------------
Business logic for payments.

A paiement settles exactly one reservation. Every write here touches two
rows (the Paiement and its Reservation's id_paiement back-reference); both
are flushed in the request session and committed together by get_db, so a
failure between them leaves nothing behind.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.exceptions import ConflictError, ValidationFailed
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Paiement, Reservation
from boutique.schemas.paiement import PaiementCreate, PaiementRead, PaiementUpdate

logger = get_logger(__name__)


class PaiementService:

    @staticmethod
    async def list_paiements(
        db: AsyncSession, id_societe: Optional[int], id_reservation: Optional[int] = None
    ) -> list[PaiementRead]:
        id_societe = require_tenant(id_societe, "list_paiements")
        query = select(Paiement).where(Paiement.id_societe == id_societe)
        if id_reservation is not None:
            query = query.where(Paiement.id_reservation == id_reservation)
        result = await db.execute(
            query.order_by(Paiement.date_paiement.desc(), Paiement.id_paiement.desc())
        )
        return [PaiementRead.model_validate(p) for p in result.scalars().all()]

    @staticmethod
    async def get_paiement(
        db: AsyncSession, id_societe: Optional[int], id_paiement: int
    ) -> Optional[PaiementRead]:
        id_societe = require_tenant(id_societe, "get_paiement")
        paiement = await PaiementService._get_scoped(db, id_societe, id_paiement)
        return None if paiement is None else PaiementRead.model_validate(paiement)

    @staticmethod
    async def create_paiement(
        db: AsyncSession, id_societe: Optional[int], data: PaiementCreate
    ) -> PaiementRead:
        """
        Record the payment of a reservation and point the reservation at it.

        Raises:
            ValidationFailed: The reservation does not exist in this societe.
            ConflictError: The reservation already has a paiement.
        """
        id_societe = require_tenant(id_societe, "create_paiement")
        reservation = await PaiementService._ensure_reservation(db, id_societe, data.id_reservation)
        await PaiementService._ensure_unpaid(db, reservation)

        paiement = Paiement(id_societe=id_societe, **data.model_dump())
        db.add(paiement)
        await db.flush()

        await PaiementService._set_back_reference(db, reservation, paiement.id_paiement)
        await db.refresh(paiement)

        logger.info(
            "Paiement created",
            id_paiement=paiement.id_paiement,
            id_reservation=reservation.id_reservation,
            montant=str(paiement.montant),
            id_societe=id_societe,
        )
        return PaiementRead.model_validate(paiement)

    @staticmethod
    async def update_paiement(
        db: AsyncSession, id_societe: Optional[int], id_paiement: int, data: PaiementUpdate
    ) -> Optional[PaiementRead]:
        """
        Partial update. Moving the paiement to another reservation clears the
        old reservation's back-reference and sets the new one's.
        """
        id_societe = require_tenant(id_societe, "update_paiement")
        paiement = await PaiementService._get_scoped(db, id_societe, id_paiement)
        if paiement is None:
            return None

        changes = data.patch()
        target_id = changes.pop("id_reservation", paiement.id_reservation)
        if target_id != paiement.id_reservation:
            target = await PaiementService._ensure_reservation(db, id_societe, target_id)
            await PaiementService._ensure_unpaid(db, target)
            await PaiementService._clear_back_reference(db, paiement)
            paiement.id_reservation = target_id
            await db.flush()
            await PaiementService._set_back_reference(db, target, paiement.id_paiement)

        for field, value in changes.items():
            setattr(paiement, field, value)
        await db.flush()

        logger.info("Paiement updated", id_paiement=id_paiement, id_reservation=paiement.id_reservation)
        return PaiementRead.model_validate(paiement)

    @staticmethod
    async def delete_paiement(db: AsyncSession, id_societe: Optional[int], id_paiement: int) -> bool:
        id_societe = require_tenant(id_societe, "delete_paiement")
        paiement = await PaiementService._get_scoped(db, id_societe, id_paiement)
        if paiement is None:
            return False

        await PaiementService._clear_back_reference(db, paiement)
        await db.delete(paiement)
        await db.flush()

        logger.info("Paiement deleted", id_paiement=id_paiement, id_societe=id_societe)
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _get_scoped(db: AsyncSession, id_societe: int, id_paiement: int) -> Optional[Paiement]:
        result = await db.execute(
            select(Paiement).where(
                Paiement.id_paiement == id_paiement, Paiement.id_societe == id_societe
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _ensure_reservation(
        db: AsyncSession, id_societe: int, id_reservation: int
    ) -> Reservation:
        result = await db.execute(
            select(Reservation).where(
                Reservation.id_reservation == id_reservation,
                Reservation.id_societe == id_societe,
            )
        )
        reservation = result.scalar_one_or_none()
        if reservation is None:
            raise ValidationFailed(f"La réservation {id_reservation} n'existe pas.")
        return reservation

    @staticmethod
    async def _ensure_unpaid(db: AsyncSession, reservation: Reservation) -> None:
        existing = await db.scalar(
            select(Paiement.id_paiement)
            .where(Paiement.id_reservation == reservation.id_reservation)
            .limit(1)
        )
        if reservation.id_paiement is not None or existing is not None:
            raise ConflictError("Cette réservation a déjà un paiement.")

    @staticmethod
    async def _set_back_reference(
        db: AsyncSession, reservation: Reservation, id_paiement: int
    ) -> None:
        reservation.id_paiement = id_paiement
        await db.flush()

    @staticmethod
    async def _clear_back_reference(db: AsyncSession, paiement: Paiement) -> None:
        await db.execute(
            update(Reservation)
            .where(Reservation.id_paiement == paiement.id_paiement)
            .values(id_paiement=None)
        )
        await db.flush()
