"""
models/role.py
--------------
Role ORM model, scoped to a Societe.

The role name is unique within a societe only: two companies may both
have an "ADMIN" role.
"""

from sqlalchemy import Boolean, Integer, String, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column

from boutique.db.base import Base, TenantMixin


class Role(Base, TenantMixin):
    __tablename__ = "Roles"
    __table_args__ = (
        UniqueConstraint("nom_role", "id_societe", name="IX_Roles_NomRole_IdSociete"),
    )

    id_role: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom_role: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    actif: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    def __repr__(self) -> str:
        return f"<Role id={self.id_role} nom={self.nom_role} societe={self.id_societe}>"
