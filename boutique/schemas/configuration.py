"""
schemas/configuration.py
------------------------
Pydantic models for per-societe JSON configurations.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, PatchModel


class ConfigurationCreate(CamelModel):
    cle: str = Field(..., min_length=1, max_length=100, examples=["facturation"])
    data: str = Field(..., min_length=1, examples=['{"tva": 20}'])


class ConfigurationUpdate(PatchModel):
    cle: Optional[str] = Field(None, min_length=1, max_length=100)
    data: Optional[str] = Field(None, min_length=1)


class ConfigurationRead(CamelModel):
    id_configuration: int
    id_societe: int
    cle: str
    data: str
    date_creation: datetime
    date_modification: Optional[datetime] = None


class ValidateJsonRequest(CamelModel):
    json_text: str = Field(..., alias="json", min_length=1)


class ValidateJsonResponse(CamelModel):
    is_valid: bool
    message: str
