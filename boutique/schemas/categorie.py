"""
schemas/categorie.py
--------------------
Pydantic models for Categorie.
"""

from typing import Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, PatchModel


class CategorieCreate(CamelModel):
    nom_categorie: str = Field(..., min_length=1, max_length=50, examples=["Caftan"])
    description: Optional[str] = None
    ordre_affichage: Optional[int] = None


class CategorieUpdate(PatchModel):
    nom_categorie: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    ordre_affichage: Optional[int] = None


class CategorieRead(CamelModel):
    id_categorie: int
    nom_categorie: str
    description: Optional[str] = None
    ordre_affichage: Optional[int] = None
    id_societe: int
