"""
schemas/taille.py
-----------------
Pydantic models for Taille. The label travels as "taille" in JSON.
"""

from typing import Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, PatchModel


class TailleCreate(CamelModel):
    libelle: str = Field(..., alias="taille", min_length=1, max_length=50, examples=["M"])


class TailleUpdate(PatchModel):
    libelle: Optional[str] = Field(None, alias="taille", min_length=1, max_length=50)


class TailleRead(CamelModel):
    id_taille: int
    libelle: str = Field(..., alias="taille")
    id_societe: int
