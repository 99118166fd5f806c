"""
models/client.py
----------------
Customer holding reservations.

telephone / email carry no database unique index: their uniqueness scope
(global or per societe) is a runtime setting, checked by ClientService.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from boutique.db.base import Base, TenantMixin


class Client(Base, TenantMixin):
    __tablename__ = "Clients"

    id_client: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom_client: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    prenom_client: Mapped[str] = mapped_column(String(100), nullable=False)
    telephone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(100))
    adresse_principale: Mapped[Optional[str]] = mapped_column(Text)
    photo_cin: Mapped[Optional[str]] = mapped_column(Text)
    total_commandes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    date_creation_fiche: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    actif: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    def __repr__(self) -> str:
        return f"<Client id={self.id_client} nom={self.nom_client} {self.prenom_client}>"
