"""
services/article_service.py
---------------------------
Business logic for rentable articles.

Articles reference a Categorie (required) and a Taille (optional); both
must exist in the caller's societe. Responses embed those two rows, so
every read goes through _load(), which eager-loads them.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from boutique.core.exceptions import ValidationFailed
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Article, Categorie, Taille
from boutique.schemas.article import ArticleCreate, ArticleRead, ArticleUpdate

logger = get_logger(__name__)


class ArticleService:

    @staticmethod
    async def list_articles(
        db: AsyncSession,
        id_societe: Optional[int],
        include_inactive: bool = False,
        id_categorie: Optional[int] = None,
    ) -> list[ArticleRead]:
        id_societe = require_tenant(id_societe, "list_articles")
        query = (
            select(Article)
            .options(selectinload(Article.taille), selectinload(Article.categorie))
            .where(Article.id_societe == id_societe)
        )
        if not include_inactive:
            query = query.where(Article.actif.is_(True))
        if id_categorie is not None:
            query = query.where(Article.id_categorie == id_categorie)

        result = await db.execute(query.order_by(Article.nom_article, Article.id_article))
        return [ArticleRead.model_validate(a) for a in result.scalars().all()]

    @staticmethod
    async def get_article(
        db: AsyncSession, id_societe: Optional[int], id_article: int
    ) -> Optional[ArticleRead]:
        id_societe = require_tenant(id_societe, "get_article")
        article = await ArticleService._load(db, id_societe, id_article)
        return None if article is None else ArticleRead.model_validate(article)

    @staticmethod
    async def create_article(
        db: AsyncSession, id_societe: Optional[int], data: ArticleCreate
    ) -> ArticleRead:
        id_societe = require_tenant(id_societe, "create_article")
        await ArticleService._ensure_categorie(db, id_societe, data.id_categorie)
        if data.id_taille is not None:
            await ArticleService._ensure_taille(db, id_societe, data.id_taille)

        article = Article(id_societe=id_societe, **data.model_dump())
        db.add(article)
        await db.flush()

        logger.info(
            "Article created",
            id_article=article.id_article,
            nom=article.nom_article,
            id_societe=id_societe,
        )
        return ArticleRead.model_validate(await ArticleService._load(db, id_societe, article.id_article))

    @staticmethod
    async def update_article(
        db: AsyncSession, id_societe: Optional[int], id_article: int, data: ArticleUpdate
    ) -> Optional[ArticleRead]:
        """
        Partial update. An explicit null on idTaille detaches the size;
        nulls on any other field are ignored.
        """
        id_societe = require_tenant(id_societe, "update_article")
        article = await ArticleService._load(db, id_societe, id_article)
        if article is None:
            return None

        changes = data.patch()
        if "id_categorie" in changes:
            await ArticleService._ensure_categorie(db, id_societe, changes["id_categorie"])
        if changes.get("id_taille") is not None:
            await ArticleService._ensure_taille(db, id_societe, changes["id_taille"])

        for field, value in changes.items():
            setattr(article, field, value)
        await db.flush()

        logger.info("Article updated", id_article=id_article, fields=sorted(changes))
        return ArticleRead.model_validate(await ArticleService._load(db, id_societe, id_article))

    @staticmethod
    async def delete_article(db: AsyncSession, id_societe: Optional[int], id_article: int) -> bool:
        id_societe = require_tenant(id_societe, "delete_article")
        article = await db.scalar(
            select(Article).where(Article.id_article == id_article, Article.id_societe == id_societe)
        )
        if article is None:
            return False

        await db.delete(article)
        await db.flush()

        logger.info("Article deleted", id_article=id_article, id_societe=id_societe)
        return True

    @staticmethod
    async def toggle_article_status(
        db: AsyncSession, id_societe: Optional[int], id_article: int
    ) -> bool:
        id_societe = require_tenant(id_societe, "toggle_article_status")
        article = await db.scalar(
            select(Article).where(Article.id_article == id_article, Article.id_societe == id_societe)
        )
        if article is None:
            return False

        article.actif = not article.actif
        await db.flush()

        logger.info("Article status toggled", id_article=id_article, actif=article.actif)
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _load(db: AsyncSession, id_societe: int, id_article: int) -> Optional[Article]:
        # populate_existing: relationships may have changed since the row
        # entered the identity map
        result = await db.execute(
            select(Article)
            .options(selectinload(Article.taille), selectinload(Article.categorie))
            .where(Article.id_article == id_article, Article.id_societe == id_societe)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _ensure_categorie(db: AsyncSession, id_societe: int, id_categorie: int) -> None:
        found = await db.scalar(
            select(Categorie.id_categorie).where(
                Categorie.id_categorie == id_categorie, Categorie.id_societe == id_societe
            )
        )
        if found is None:
            raise ValidationFailed(
                f"La catégorie avec l'ID {id_categorie} n'existe pas pour cette société."
            )

    @staticmethod
    async def _ensure_taille(db: AsyncSession, id_societe: int, id_taille: int) -> None:
        found = await db.scalar(
            select(Taille.id_taille).where(
                Taille.id_taille == id_taille, Taille.id_societe == id_societe
            )
        )
        if found is None:
            raise ValidationFailed(
                f"La taille avec l'ID {id_taille} n'existe pas pour cette société."
            )
