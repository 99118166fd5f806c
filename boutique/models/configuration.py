"""
models/configuration.py
-----------------------
Per-societe key/value settings where the value is an opaque JSON document.

data is stored as text exactly as submitted; services only check that it
parses.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from boutique.db.base import Base, TenantMixin


class Configuration(Base, TenantMixin):
    __tablename__ = "Configurations"
    __table_args__ = (
        UniqueConstraint("cle", "id_societe", name="IX_Configurations_Cle_Societe"),
    )

    id_configuration: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cle: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    date_creation: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    date_modification: Mapped[Optional[datetime]] = mapped_column(DateTime)

    def __repr__(self) -> str:
        return f"<Configuration id={self.id_configuration} cle={self.cle}>"
