"""
models/societe.py
-----------------
Societe (company) ORM model: the root of tenancy.

Every other table carries an id_societe foreign key back here, directly
or (for Users) through its Role.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from boutique.db.base import Base


class Societe(Base):
    __tablename__ = "Societes"

    id_societe: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom_societe: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    adresse: Mapped[Optional[str]] = mapped_column(String(255))
    telephone: Mapped[Optional[str]] = mapped_column(String(20))
    email: Mapped[Optional[str]] = mapped_column(String(100), unique=True)
    site_web: Mapped[Optional[str]] = mapped_column(String(255))
    logo: Mapped[Optional[str]] = mapped_column(Text)
    actif: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    date_creation: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Societe id={self.id_societe} nom={self.nom_societe}>"
