"""
schemas/paiement.py
-------------------
Pydantic models for Paiement.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, Money, PatchModel


class PaiementCreate(CamelModel):
    id_reservation: int
    montant: Money = Field(..., gt=0, max_digits=10, decimal_places=2, examples=["500.00"])
    methode_paiement: Optional[str] = Field(None, max_length=50, examples=["Espèces"])
    reference: Optional[str] = Field(None, max_length=100)


class PaiementUpdate(PatchModel):
    id_reservation: Optional[int] = None
    montant: Optional[Money] = Field(None, gt=0, max_digits=10, decimal_places=2)
    methode_paiement: Optional[str] = Field(None, max_length=50)
    reference: Optional[str] = Field(None, max_length=100)


class PaiementRead(CamelModel):
    id_paiement: int
    id_reservation: int
    montant: Money
    date_paiement: datetime
    methode_paiement: Optional[str] = None
    reference: Optional[str] = None
    id_societe: int
