"""
api/routes/categories.py
------------------------
Article category endpoints, scoped to the caller's societe.
"""

from fastapi import APIRouter, HTTPException, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.schemas.base import MessageResponse
from boutique.schemas.categorie import CategorieCreate, CategorieRead, CategorieUpdate
from boutique.services.categorie_service import CategorieService

router = APIRouter(prefix="/api/categories", tags=["Categories"])


def _not_found(id_categorie: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Catégorie avec l'ID {id_categorie} introuvable.",
    )


@router.get("", response_model=list[CategorieRead], summary="List categories")
async def list_categories(db: DbSession, id_societe: TenantId) -> list[CategorieRead]:
    return await CategorieService.list_categories(db, id_societe)


@router.get("/{id_categorie}", response_model=CategorieRead, summary="Get a category")
async def get_categorie(id_categorie: int, db: DbSession, id_societe: TenantId) -> CategorieRead:
    categorie = await CategorieService.get_categorie(db, id_societe, id_categorie)
    if categorie is None:
        raise _not_found(id_categorie)
    return categorie


@router.post(
    "",
    response_model=CategorieRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_categorie(
    body: CategorieCreate, response: Response, db: DbSession, id_societe: TenantId
) -> CategorieRead:
    categorie = await CategorieService.create_categorie(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{categorie.id_categorie}"
    return categorie


@router.put("/{id_categorie}", response_model=CategorieRead, summary="Update a category")
async def update_categorie(
    id_categorie: int, body: CategorieUpdate, db: DbSession, id_societe: TenantId
) -> CategorieRead:
    categorie = await CategorieService.update_categorie(db, id_societe, id_categorie, body)
    if categorie is None:
        raise _not_found(id_categorie)
    return categorie


@router.delete("/{id_categorie}", response_model=MessageResponse, summary="Delete a category")
async def delete_categorie(
    id_categorie: int, db: DbSession, id_societe: TenantId
) -> MessageResponse:
    if not await CategorieService.delete_categorie(db, id_societe, id_categorie):
        raise _not_found(id_categorie)
    return MessageResponse(message="Catégorie supprimée avec succès.")
