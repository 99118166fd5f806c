"""
models/taille.py
----------------
Size label (S, M, 38, ...), scoped to a Societe.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from boutique.db.base import Base, TenantMixin


class Taille(Base, TenantMixin):
    __tablename__ = "Tailles"
    __table_args__ = (
        UniqueConstraint("taille", "id_societe", name="IX_Tailles_Libelle_Societe"),
    )

    id_taille: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    libelle: Mapped[str] = mapped_column("taille", String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<Taille id={self.id_taille} libelle={self.libelle}>"
