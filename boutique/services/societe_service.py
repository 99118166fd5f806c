"""
services/societe_service.py
---------------------------
Business logic for societes (tenants).

Societes are the root of tenancy, so this service is not scoped by
id_societe: name and email are unique across the whole system.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (unique names, referential guards)
  - Mapping ORM rows to response schemas
  - Never returning HTTP responses (that's the route's job)
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.exceptions import ConflictError
from boutique.core.logging import get_logger
from boutique.models import (
    Article,
    Categorie,
    Client,
    Configuration,
    Paiement,
    Reservation,
    Role,
    Societe,
    Taille,
)
from boutique.schemas.societe import SocieteCreate, SocieteRead, SocieteUpdate

logger = get_logger(__name__)

# Tables whose id_societe RESTRICTs deleting the societe
_DEPENDENT_MODELS = (Role, Categorie, Taille, Article, Client, Reservation, Paiement, Configuration)


class SocieteService:

    @staticmethod
    async def list_societes(
        db: AsyncSession, include_inactive: bool = False
    ) -> list[SocieteRead]:
        query = select(Societe)
        if not include_inactive:
            query = query.where(Societe.actif.is_(True))
        result = await db.execute(query.order_by(Societe.nom_societe, Societe.id_societe))
        return [SocieteRead.model_validate(s) for s in result.scalars().all()]

    @staticmethod
    async def get_societe(db: AsyncSession, id_societe: int) -> Optional[SocieteRead]:
        societe = await db.get(Societe, id_societe)
        return None if societe is None else SocieteRead.model_validate(societe)

    @staticmethod
    async def create_societe(db: AsyncSession, data: SocieteCreate) -> SocieteRead:
        """
        Create a new societe.
        Raises ConflictError if the name or email is already taken.
        """
        await SocieteService._ensure_unique_name(db, data.nom_societe)
        if data.email:
            await SocieteService._ensure_unique_email(db, data.email)

        societe = Societe(**data.model_dump())
        db.add(societe)
        await db.flush()
        await db.refresh(societe)

        logger.info("Societe created", id_societe=societe.id_societe, nom=societe.nom_societe)
        return SocieteRead.model_validate(societe)

    @staticmethod
    async def update_societe(
        db: AsyncSession, id_societe: int, data: SocieteUpdate
    ) -> Optional[SocieteRead]:
        societe = await db.get(Societe, id_societe)
        if societe is None:
            return None

        changes = data.patch()
        nom = changes.get("nom_societe")
        if nom and nom.lower() != societe.nom_societe.lower():
            await SocieteService._ensure_unique_name(db, nom, exclude_id=id_societe)
        email = changes.get("email")
        if email and email.lower() != (societe.email or "").lower():
            await SocieteService._ensure_unique_email(db, email, exclude_id=id_societe)

        for field, value in changes.items():
            setattr(societe, field, value)
        await db.flush()

        logger.info("Societe updated", id_societe=id_societe, fields=sorted(changes))
        return SocieteRead.model_validate(societe)

    @staticmethod
    async def delete_societe(db: AsyncSession, id_societe: int) -> bool:
        """
        Hard-delete a societe that owns no data.
        Raises ConflictError while any tenant table still references it.
        """
        societe = await db.get(Societe, id_societe)
        if societe is None:
            return False

        for model in _DEPENDENT_MODELS:
            count = await db.scalar(
                select(func.count()).select_from(model).where(model.id_societe == id_societe)
            )
            if count:
                raise ConflictError(
                    f"La société '{societe.nom_societe}' ne peut pas être supprimée car "
                    f"elle possède encore des données ({model.__tablename__}). "
                    "Désactivez-la à la place."
                )

        await db.delete(societe)
        await db.flush()

        logger.info("Societe deleted", id_societe=id_societe, nom=societe.nom_societe)
        return True

    @staticmethod
    async def toggle_societe_status(db: AsyncSession, id_societe: int) -> bool:
        societe = await db.get(Societe, id_societe)
        if societe is None:
            return False

        societe.actif = not societe.actif
        await db.flush()

        logger.info("Societe status toggled", id_societe=id_societe, actif=societe.actif)
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _ensure_unique_name(
        db: AsyncSession, nom: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Societe.id_societe).where(func.lower(Societe.nom_societe) == nom.lower())
        if exclude_id is not None:
            query = query.where(Societe.id_societe != exclude_id)
        if await db.scalar(query.limit(1)) is not None:
            raise ConflictError(f"Une société avec le nom '{nom}' existe déjà.")

    @staticmethod
    async def _ensure_unique_email(
        db: AsyncSession, email: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Societe.id_societe).where(
            Societe.email.is_not(None), func.lower(Societe.email) == email.lower()
        )
        if exclude_id is not None:
            query = query.where(Societe.id_societe != exclude_id)
        if await db.scalar(query.limit(1)) is not None:
            raise ConflictError(f"Une société avec l'email '{email}' existe déjà.")
