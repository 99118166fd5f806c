"""
schemas/client.py
-----------------
Pydantic models for Client.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, PatchModel


class ClientCreate(CamelModel):
    nom_client: str = Field(..., min_length=1, max_length=100)
    prenom_client: str = Field(..., min_length=1, max_length=100)
    telephone: str = Field(..., min_length=1, max_length=20, examples=["0612345678"])
    email: Optional[str] = Field(None, max_length=100)
    adresse_principale: Optional[str] = None
    photo_cin: Optional[str] = None
    actif: bool = True


class ClientUpdate(PatchModel):
    nom_client: Optional[str] = Field(None, min_length=1, max_length=100)
    prenom_client: Optional[str] = Field(None, min_length=1, max_length=100)
    telephone: Optional[str] = Field(None, min_length=1, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    adresse_principale: Optional[str] = None
    photo_cin: Optional[str] = None
    total_commandes: Optional[int] = Field(None, ge=0)
    actif: Optional[bool] = None


class ClientRead(CamelModel):
    id_client: int
    nom_client: str
    prenom_client: str
    telephone: str
    email: Optional[str] = None
    adresse_principale: Optional[str] = None
    photo_cin: Optional[str] = None
    id_societe: int
    total_commandes: int
    date_creation_fiche: datetime
    actif: bool
