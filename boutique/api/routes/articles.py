"""
api/routes/articles.py
----------------------
Article endpoints. The societe always comes from the caller's token.

GET    /api/articles                 — List (active only unless includeInactive).
GET    /api/articles/{id}            — One article with its taille and categorie.
POST   /api/articles                 — Create.
PUT    /api/articles/{id}            — Partial update.
DELETE /api/articles/{id}            — Delete.
PATCH  /api/articles/{id}/actif      — Toggle the actif flag.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.schemas.article import ArticleCreate, ArticleRead, ArticleUpdate
from boutique.schemas.base import MessageResponse
from boutique.services.article_service import ArticleService

router = APIRouter(prefix="/api/articles", tags=["Articles"])


def _not_found(id_article: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Article avec l'ID {id_article} introuvable.",
    )


@router.get("", response_model=list[ArticleRead], summary="List articles")
async def list_articles(
    db: DbSession,
    id_societe: TenantId,
    include_inactive: bool = Query(False, alias="includeInactive"),
    id_categorie: Optional[int] = Query(None, alias="idCategorie"),
) -> list[ArticleRead]:
    return await ArticleService.list_articles(db, id_societe, include_inactive, id_categorie)


@router.get("/{id_article}", response_model=ArticleRead, summary="Get an article")
async def get_article(id_article: int, db: DbSession, id_societe: TenantId) -> ArticleRead:
    article = await ArticleService.get_article(db, id_societe, id_article)
    if article is None:
        raise _not_found(id_article)
    return article


@router.post(
    "",
    response_model=ArticleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an article",
)
async def create_article(
    body: ArticleCreate, response: Response, db: DbSession, id_societe: TenantId
) -> ArticleRead:
    article = await ArticleService.create_article(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{article.id_article}"
    return article


@router.put("/{id_article}", response_model=ArticleRead, summary="Update an article")
async def update_article(
    id_article: int, body: ArticleUpdate, db: DbSession, id_societe: TenantId
) -> ArticleRead:
    article = await ArticleService.update_article(db, id_societe, id_article, body)
    if article is None:
        raise _not_found(id_article)
    return article


@router.delete("/{id_article}", response_model=MessageResponse, summary="Delete an article")
async def delete_article(id_article: int, db: DbSession, id_societe: TenantId) -> MessageResponse:
    if not await ArticleService.delete_article(db, id_societe, id_article):
        raise _not_found(id_article)
    return MessageResponse(message="Article supprimé avec succès.")


@router.patch(
    "/{id_article}/actif",
    response_model=ArticleRead,
    summary="Toggle an article's active flag",
)
async def toggle_article_status(
    id_article: int, db: DbSession, id_societe: TenantId
) -> ArticleRead:
    if not await ArticleService.toggle_article_status(db, id_societe, id_article):
        raise _not_found(id_article)
    return await ArticleService.get_article(db, id_societe, id_article)
