"""
models/article.py
-----------------
Rentable garment.

Relationships are declared lazy="raise": services must eager-load
taille / categorie explicitly (selectinload), an implicit lazy load would
fail under AsyncSession anyway.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boutique.db.base import Base, TenantMixin
from boutique.models.categorie import Categorie
from boutique.models.taille import Taille


class Article(Base, TenantMixin):
    __tablename__ = "Articles"

    id_article: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom_article: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    prix_location_base: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    prix_avance_base: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    id_taille: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("Tailles.id_taille", ondelete="RESTRICT"), index=True
    )
    couleur: Mapped[Optional[str]] = mapped_column(String(50))
    photo: Mapped[Optional[str]] = mapped_column(Text)
    id_categorie: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Categories.id_categorie", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    actif: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    taille: Mapped[Optional[Taille]] = relationship(Taille, lazy="raise")
    categorie: Mapped[Optional[Categorie]] = relationship(Categorie, lazy="raise")

    def __repr__(self) -> str:
        return f"<Article id={self.id_article} nom={self.nom_article}>"
