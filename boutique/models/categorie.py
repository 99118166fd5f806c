"""
models/categorie.py
-------------------
Article category, scoped to a Societe.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from boutique.db.base import Base, TenantMixin


class Categorie(Base, TenantMixin):
    __tablename__ = "Categories"
    __table_args__ = (
        UniqueConstraint(
            "nom_categorie", "id_societe", name="IX_Categories_NomCategorie_Societe"
        ),
    )

    id_categorie: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom_categorie: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    ordre_affichage: Mapped[Optional[int]] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<Categorie id={self.id_categorie} nom={self.nom_categorie}>"
