"""
schemas/role.py
---------------
Pydantic models for Role. id_societe is never accepted on input: it
always comes from the caller's token.
"""

from typing import Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, PatchModel


class RoleCreate(CamelModel):
    nom_role: str = Field(..., min_length=1, max_length=50, examples=["MANAGER"])
    description: str = Field("", max_length=255)
    actif: bool = True


class RoleUpdate(PatchModel):
    nom_role: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    actif: Optional[bool] = None


class RoleRead(CamelModel):
    id_role: int
    id_societe: int
    nom_role: str
    description: str
    actif: bool
