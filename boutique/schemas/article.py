"""
schemas/article.py
------------------
Pydantic models for Article. Responses embed the taille and categorie.
"""

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from boutique.schemas.base import CamelModel, Money, PatchModel
from boutique.schemas.categorie import CategorieRead
from boutique.schemas.taille import TailleRead


class ArticleCreate(CamelModel):
    nom_article: str = Field(..., min_length=1, max_length=150, examples=["Caftan brodé or"])
    description: str = Field(..., min_length=1)
    prix_location_base: Money = Field(..., ge=0, max_digits=10, decimal_places=2)
    prix_avance_base: Money = Field(..., ge=0, max_digits=10, decimal_places=2)
    id_taille: Optional[int] = None
    couleur: Optional[str] = Field(None, max_length=50)
    photo: Optional[str] = None
    id_categorie: int
    actif: bool = True


class ArticleUpdate(PatchModel):
    CLEARABLE: ClassVar[FrozenSet[str]] = frozenset({"id_taille"})

    nom_article: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, min_length=1)
    prix_location_base: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)
    prix_avance_base: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)
    id_taille: Optional[int] = None
    couleur: Optional[str] = Field(None, max_length=50)
    photo: Optional[str] = None
    id_categorie: Optional[int] = None
    actif: Optional[bool] = None


class ArticleRead(CamelModel):
    id_article: int
    nom_article: str
    description: str
    prix_location_base: Money
    prix_avance_base: Money
    id_taille: Optional[int] = None
    couleur: Optional[str] = None
    photo: Optional[str] = None
    id_categorie: int
    id_societe: int
    actif: bool
    taille: Optional[TailleRead] = None
    categorie: Optional[CategorieRead] = None
