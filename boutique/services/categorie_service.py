"""
services/categorie_service.py
-----------------------------
Business logic for article categories, scoped by id_societe.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.exceptions import ConflictError
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Article, Categorie
from boutique.schemas.categorie import CategorieCreate, CategorieRead, CategorieUpdate

logger = get_logger(__name__)


class CategorieService:

    @staticmethod
    async def list_categories(db: AsyncSession, id_societe: Optional[int]) -> list[CategorieRead]:
        """Categories ordered by display order (unset last), then name."""
        id_societe = require_tenant(id_societe, "list_categories")
        result = await db.execute(
            select(Categorie)
            .where(Categorie.id_societe == id_societe)
            .order_by(
                Categorie.ordre_affichage.is_(None),
                Categorie.ordre_affichage,
                Categorie.nom_categorie,
            )
        )
        return [CategorieRead.model_validate(c) for c in result.scalars().all()]

    @staticmethod
    async def get_categorie(
        db: AsyncSession, id_societe: Optional[int], id_categorie: int
    ) -> Optional[CategorieRead]:
        id_societe = require_tenant(id_societe, "get_categorie")
        categorie = await CategorieService._get_scoped(db, id_societe, id_categorie)
        return None if categorie is None else CategorieRead.model_validate(categorie)

    @staticmethod
    async def create_categorie(
        db: AsyncSession, id_societe: Optional[int], data: CategorieCreate
    ) -> CategorieRead:
        id_societe = require_tenant(id_societe, "create_categorie")
        await CategorieService._ensure_unique_name(db, id_societe, data.nom_categorie)

        categorie = Categorie(id_societe=id_societe, **data.model_dump())
        db.add(categorie)
        await db.flush()

        logger.info(
            "Categorie created",
            id_categorie=categorie.id_categorie,
            nom=categorie.nom_categorie,
            id_societe=id_societe,
        )
        return CategorieRead.model_validate(categorie)

    @staticmethod
    async def update_categorie(
        db: AsyncSession, id_societe: Optional[int], id_categorie: int, data: CategorieUpdate
    ) -> Optional[CategorieRead]:
        id_societe = require_tenant(id_societe, "update_categorie")
        categorie = await CategorieService._get_scoped(db, id_societe, id_categorie)
        if categorie is None:
            return None

        changes = data.patch()
        if "nom_categorie" in changes:
            await CategorieService._ensure_unique_name(
                db, id_societe, changes["nom_categorie"], exclude_id=id_categorie
            )

        for field, value in changes.items():
            setattr(categorie, field, value)
        await db.flush()

        logger.info("Categorie updated", id_categorie=id_categorie, id_societe=id_societe)
        return CategorieRead.model_validate(categorie)

    @staticmethod
    async def delete_categorie(
        db: AsyncSession, id_societe: Optional[int], id_categorie: int
    ) -> bool:
        id_societe = require_tenant(id_societe, "delete_categorie")
        categorie = await CategorieService._get_scoped(db, id_societe, id_categorie)
        if categorie is None:
            return False

        articles = await db.scalar(
            select(func.count()).select_from(Article).where(Article.id_categorie == id_categorie)
        )
        if articles:
            raise ConflictError(
                f"La catégorie '{categorie.nom_categorie}' ne peut pas être supprimée car "
                f"elle est utilisée par {articles} article(s)."
            )

        await db.delete(categorie)
        await db.flush()

        logger.info("Categorie deleted", id_categorie=id_categorie, id_societe=id_societe)
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _get_scoped(
        db: AsyncSession, id_societe: int, id_categorie: int
    ) -> Optional[Categorie]:
        result = await db.execute(
            select(Categorie).where(
                Categorie.id_categorie == id_categorie, Categorie.id_societe == id_societe
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _ensure_unique_name(
        db: AsyncSession, id_societe: int, nom: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Categorie.id_categorie).where(
            Categorie.id_societe == id_societe,
            func.lower(Categorie.nom_categorie) == nom.lower(),
        )
        if exclude_id is not None:
            query = query.where(Categorie.id_categorie != exclude_id)
        if await db.scalar(query.limit(1)) is not None:
            raise ConflictError(
                f"Une catégorie avec le nom '{nom}' existe déjà pour cette société."
            )
