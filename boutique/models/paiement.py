"""
models/paiement.py
------------------
Payment record, tied 1:1 to a Reservation.

id_reservation is the authoritative link; Reservations.id_paiement is the
back-reference the services keep consistent with it.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from boutique.db.base import Base, TenantMixin


class Paiement(Base, TenantMixin):
    __tablename__ = "Paiements"

    id_paiement: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_reservation: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Reservations.id_reservation", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    montant: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    date_paiement: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    methode_paiement: Mapped[Optional[str]] = mapped_column(String(50))
    reference: Mapped[Optional[str]] = mapped_column(String(100))

    def __repr__(self) -> str:
        return f"<Paiement id={self.id_paiement} reservation={self.id_reservation}>"
