"""
schemas/reservation.py
----------------------
Pydantic models for Reservation.

Date ordering is not checked here: on update it depends on the stored
values, so ReservationService owns that rule for both create and update.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, Field

from boutique.models.reservation import StatutReservation
from boutique.schemas.base import CamelModel, Money, PatchModel
from boutique.schemas.client import ClientRead
from boutique.schemas.paiement import PaiementRead


class ReservationCreate(CamelModel):
    id_client: int
    date_debut: datetime
    date_fin: datetime
    montant_total: Money = Field(..., ge=0, max_digits=10, decimal_places=2)
    statut_reservation: StatutReservation = StatutReservation.EnAttente
    id_paiement: Optional[int] = None
    remise_appliquee: Money = Field(Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)


class ReservationUpdate(PatchModel):
    CLEARABLE: ClassVar[FrozenSet[str]] = frozenset({"id_paiement"})

    id_client: Optional[int] = None
    date_debut: Optional[datetime] = None
    date_fin: Optional[datetime] = None
    montant_total: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)
    statut_reservation: Optional[StatutReservation] = None
    id_paiement: Optional[int] = None
    remise_appliquee: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)


class ReservationStatutUpdate(BaseModel):
    statut: StatutReservation


class ReservationRead(CamelModel):
    id_reservation: int
    id_client: int
    date_reservation: datetime
    date_debut: datetime
    date_fin: datetime
    montant_total: Money
    statut_reservation: StatutReservation
    id_paiement: Optional[int] = None
    remise_appliquee: Money
    id_societe: int
    client: Optional[ClientRead] = None
    paiement: Optional[PaiementRead] = None
