"""
models/reservation.py
---------------------
Reservation ORM model and its lifecycle status.

Reservation and Paiement point at each other:
  Paiements.id_reservation  → owning reservation (authoritative, required)
  Reservations.id_paiement  → back-reference kept in sync by the services

The back-reference FK is created with use_alter to break the table cycle.
Both relationships are view-only: services write the integer columns
directly so the unit of work never has to order the two rows.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boutique.db.base import Base, TenantMixin
from boutique.models.client import Client


class StatutReservation(str, PyEnum):
    EnAttente = "EnAttente"
    Confirmee = "Confirmee"
    EnCours = "EnCours"
    Terminee = "Terminee"
    Annulee = "Annulee"


class Reservation(Base, TenantMixin):
    __tablename__ = "Reservations"

    id_reservation: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_client: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Clients.id_client", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date_reservation: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    date_debut: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    date_fin: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    montant_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    statut_reservation: Mapped[StatutReservation] = mapped_column(
        Enum(StatutReservation, native_enum=False, length=20),
        nullable=False,
        default=StatutReservation.EnAttente,
    )
    id_paiement: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey(
            "Paiements.id_paiement",
            ondelete="SET NULL",
            use_alter=True,
            name="FK_Reservations_Paiements_id_paiement",
        ),
        index=True,
    )
    remise_appliquee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00")
    )

    client: Mapped[Optional[Client]] = relationship(Client, lazy="raise")
    paiement: Mapped[Optional["Paiement"]] = relationship(  # noqa: F821
        "Paiement",
        foreign_keys=[id_paiement],
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Reservation id={self.id_reservation} client={self.id_client}>"
