"""
schemas/user.py
---------------
Pydantic models for User creation, login, and responses.

Security note:
  - mot_de_passe_hash is NEVER included in any response schema.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from boutique.schemas.base import CamelModel
from boutique.schemas.role import RoleRead


class UserCreate(CamelModel):
    """Used by an authenticated user to add a colleague to their societe."""
    nom_complet: str = Field(..., min_length=1, max_length=100)
    login: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8, max_length=128)
    email: Optional[EmailStr] = None
    telephone: Optional[str] = Field(None, max_length=20)
    id_role: int
    actif: bool = True


class UserRead(CamelModel):
    id_utilisateur: int
    nom_complet: str
    login: str
    email: Optional[str] = None
    telephone: Optional[str] = None
    id_role: int
    actif: bool
    date_creation_compte: datetime
    role: Optional[RoleRead] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserRead
