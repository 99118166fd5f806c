"""
models/user.py
--------------
User ORM model.

A user has no id_societe column of its own: it belongs to a Role and,
through it, to that role's Societe. The role is eagerly joined so the
tenant can be read without an extra round-trip (login, /me).

The mot_de_passe_hash column stores bcrypt hashes only; plain text is
never stored and never logged.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boutique.db.base import Base
from boutique.models.role import Role


class User(Base):
    __tablename__ = "Users"

    id_utilisateur: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom_complet: Mapped[str] = mapped_column(String(100), nullable=False)
    login: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    mot_de_passe_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    telephone: Mapped[Optional[str]] = mapped_column(String(20))
    id_role: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Roles.id_role", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    actif: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    date_creation_compte: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    role: Mapped[Role] = relationship(Role, lazy="joined")

    def __repr__(self) -> str:
        return f"<User id={self.id_utilisateur} login={self.login} role={self.id_role}>"
