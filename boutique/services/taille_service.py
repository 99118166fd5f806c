"""
services/taille_service.py
--------------------------
Business logic for size labels, scoped by id_societe.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.exceptions import ConflictError
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Article, Taille
from boutique.schemas.taille import TailleCreate, TailleRead, TailleUpdate

logger = get_logger(__name__)


class TailleService:

    @staticmethod
    async def list_tailles(db: AsyncSession, id_societe: Optional[int]) -> list[TailleRead]:
        id_societe = require_tenant(id_societe, "list_tailles")
        result = await db.execute(
            select(Taille)
            .where(Taille.id_societe == id_societe)
            .order_by(Taille.libelle, Taille.id_taille)
        )
        return [TailleRead.model_validate(t) for t in result.scalars().all()]

    @staticmethod
    async def get_taille(
        db: AsyncSession, id_societe: Optional[int], id_taille: int
    ) -> Optional[TailleRead]:
        id_societe = require_tenant(id_societe, "get_taille")
        taille = await TailleService._get_scoped(db, id_societe, id_taille)
        return None if taille is None else TailleRead.model_validate(taille)

    @staticmethod
    async def create_taille(
        db: AsyncSession, id_societe: Optional[int], data: TailleCreate
    ) -> TailleRead:
        id_societe = require_tenant(id_societe, "create_taille")
        await TailleService._ensure_unique_label(db, id_societe, data.libelle)

        taille = Taille(id_societe=id_societe, libelle=data.libelle)
        db.add(taille)
        await db.flush()

        logger.info(
            "Taille created", id_taille=taille.id_taille, libelle=taille.libelle, id_societe=id_societe
        )
        return TailleRead.model_validate(taille)

    @staticmethod
    async def update_taille(
        db: AsyncSession, id_societe: Optional[int], id_taille: int, data: TailleUpdate
    ) -> Optional[TailleRead]:
        id_societe = require_tenant(id_societe, "update_taille")
        taille = await TailleService._get_scoped(db, id_societe, id_taille)
        if taille is None:
            return None

        changes = data.patch()
        if "libelle" in changes:
            await TailleService._ensure_unique_label(
                db, id_societe, changes["libelle"], exclude_id=id_taille
            )
            taille.libelle = changes["libelle"]
            await db.flush()

        logger.info("Taille updated", id_taille=id_taille, id_societe=id_societe)
        return TailleRead.model_validate(taille)

    @staticmethod
    async def delete_taille(db: AsyncSession, id_societe: Optional[int], id_taille: int) -> bool:
        id_societe = require_tenant(id_societe, "delete_taille")
        taille = await TailleService._get_scoped(db, id_societe, id_taille)
        if taille is None:
            return False

        articles = await db.scalar(
            select(func.count()).select_from(Article).where(Article.id_taille == id_taille)
        )
        if articles:
            raise ConflictError(
                f"La taille '{taille.libelle}' ne peut pas être supprimée car "
                f"elle est utilisée par {articles} article(s)."
            )

        await db.delete(taille)
        await db.flush()

        logger.info("Taille deleted", id_taille=id_taille, id_societe=id_societe)
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _get_scoped(db: AsyncSession, id_societe: int, id_taille: int) -> Optional[Taille]:
        result = await db.execute(
            select(Taille).where(Taille.id_taille == id_taille, Taille.id_societe == id_societe)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _ensure_unique_label(
        db: AsyncSession, id_societe: int, libelle: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Taille.id_taille).where(
            Taille.id_societe == id_societe, func.lower(Taille.libelle) == libelle.lower()
        )
        if exclude_id is not None:
            query = query.where(Taille.id_taille != exclude_id)
        if await db.scalar(query.limit(1)) is not None:
            raise ConflictError(
                f"Une taille avec le libellé '{libelle}' existe déjà pour cette société."
            )
