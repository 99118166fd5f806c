"""
db/base.py
----------
Declarative base and shared mixins.

TenantMixin: Adds the id_societe foreign key every tenant-scoped table
             carries. RESTRICT keeps a Societe from being deleted while
             any of its data still exists.
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class TenantMixin:
    """Adds the indexed id_societe column pointing at Societes."""

    @declared_attr
    def id_societe(cls) -> Mapped[int]:
        return mapped_column(
            Integer,
            ForeignKey("Societes.id_societe", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )
