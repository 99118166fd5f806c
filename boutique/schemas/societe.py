"""
schemas/societe.py
------------------
Pydantic request/response models for Societe.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, PatchModel


class SocieteCreate(CamelModel):
    nom_societe: str = Field(..., min_length=1, max_length=100, examples=["Maison Caftan"])
    description: Optional[str] = None
    adresse: Optional[str] = Field(None, max_length=255)
    telephone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    site_web: Optional[str] = Field(None, max_length=255)
    logo: Optional[str] = None
    actif: bool = True


class SocieteUpdate(PatchModel):
    nom_societe: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    adresse: Optional[str] = Field(None, max_length=255)
    telephone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    site_web: Optional[str] = Field(None, max_length=255)
    logo: Optional[str] = None
    actif: Optional[bool] = None


class SocieteRead(CamelModel):
    id_societe: int
    nom_societe: str
    description: Optional[str] = None
    adresse: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    site_web: Optional[str] = None
    logo: Optional[str] = None
    actif: bool
    date_creation: datetime
