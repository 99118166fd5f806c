"""
services/client_service.py
--------------------------
Business logic for boutique clients.

Uniqueness of telephone / email follows settings.CLIENT_UNIQUENESS_SCOPE:
"global" (default) checks every societe, "societe" only the caller's.
Clients with reservations cannot be deleted; they are deactivated instead.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.config import settings
from boutique.core.exceptions import ConflictError
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Client, Reservation
from boutique.schemas.client import ClientCreate, ClientRead, ClientUpdate

logger = get_logger(__name__)


class ClientService:

    @staticmethod
    async def list_clients(
        db: AsyncSession, id_societe: Optional[int], include_inactive: bool = False
    ) -> list[ClientRead]:
        id_societe = require_tenant(id_societe, "list_clients")
        query = select(Client).where(Client.id_societe == id_societe)
        if not include_inactive:
            query = query.where(Client.actif.is_(True))
        result = await db.execute(
            query.order_by(Client.nom_client, Client.prenom_client, Client.id_client)
        )
        return [ClientRead.model_validate(c) for c in result.scalars().all()]

    @staticmethod
    async def get_client(
        db: AsyncSession, id_societe: Optional[int], id_client: int
    ) -> Optional[ClientRead]:
        id_societe = require_tenant(id_societe, "get_client")
        client = await ClientService._get_scoped(db, id_societe, id_client)
        return None if client is None else ClientRead.model_validate(client)

    @staticmethod
    async def create_client(
        db: AsyncSession, id_societe: Optional[int], data: ClientCreate
    ) -> ClientRead:
        """
        Register a client.
        Raises ConflictError if the phone number or email is already known.
        """
        id_societe = require_tenant(id_societe, "create_client")
        await ClientService._ensure_unique_telephone(db, id_societe, data.telephone)
        if data.email:
            await ClientService._ensure_unique_email(db, id_societe, data.email)

        client = Client(id_societe=id_societe, total_commandes=0, **data.model_dump())
        db.add(client)
        await db.flush()
        await db.refresh(client)

        logger.info("Client created", id_client=client.id_client, id_societe=id_societe)
        return ClientRead.model_validate(client)

    @staticmethod
    async def update_client(
        db: AsyncSession, id_societe: Optional[int], id_client: int, data: ClientUpdate
    ) -> Optional[ClientRead]:
        id_societe = require_tenant(id_societe, "update_client")
        client = await ClientService._get_scoped(db, id_societe, id_client)
        if client is None:
            return None

        changes = data.patch()
        if "telephone" in changes:
            await ClientService._ensure_unique_telephone(
                db, id_societe, changes["telephone"], exclude_id=id_client
            )
        if changes.get("email"):
            await ClientService._ensure_unique_email(
                db, id_societe, changes["email"], exclude_id=id_client
            )

        for field, value in changes.items():
            setattr(client, field, value)
        await db.flush()

        logger.info("Client updated", id_client=id_client, fields=sorted(changes))
        return ClientRead.model_validate(client)

    @staticmethod
    async def delete_client(db: AsyncSession, id_societe: Optional[int], id_client: int) -> bool:
        """
        Hard-delete a client without reservations.
        Raises ConflictError otherwise; deactivate the client instead.
        """
        id_societe = require_tenant(id_societe, "delete_client")
        client = await ClientService._get_scoped(db, id_societe, id_client)
        if client is None:
            return False

        has_reservations = await db.scalar(
            select(Reservation.id_reservation).where(Reservation.id_client == id_client).limit(1)
        )
        if has_reservations is not None:
            raise ConflictError(
                "Impossible de supprimer un client qui a des réservations. "
                "Désactivez-le à la place."
            )

        await db.delete(client)
        await db.flush()

        logger.info("Client deleted", id_client=id_client, id_societe=id_societe)
        return True

    @staticmethod
    async def toggle_client_status(
        db: AsyncSession, id_societe: Optional[int], id_client: int
    ) -> bool:
        id_societe = require_tenant(id_societe, "toggle_client_status")
        client = await ClientService._get_scoped(db, id_societe, id_client)
        if client is None:
            return False

        client.actif = not client.actif
        await db.flush()

        logger.info("Client status toggled", id_client=id_client, actif=client.actif)
        return True

    @staticmethod
    async def increment_total_commandes(
        db: AsyncSession, id_societe: Optional[int], id_client: int
    ) -> bool:
        id_societe = require_tenant(id_societe, "increment_total_commandes")
        client = await ClientService._get_scoped(db, id_societe, id_client)
        if client is None:
            return False

        client.total_commandes += 1
        await db.flush()

        logger.info(
            "Client order count incremented",
            id_client=id_client,
            total_commandes=client.total_commandes,
        )
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _get_scoped(db: AsyncSession, id_societe: int, id_client: int) -> Optional[Client]:
        result = await db.execute(
            select(Client).where(Client.id_client == id_client, Client.id_societe == id_societe)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _scoped(query, id_societe: int, exclude_id: Optional[int]):
        if settings.CLIENT_UNIQUENESS_SCOPE == "societe":
            query = query.where(Client.id_societe == id_societe)
        if exclude_id is not None:
            query = query.where(Client.id_client != exclude_id)
        return query.limit(1)

    @staticmethod
    async def _ensure_unique_telephone(
        db: AsyncSession, id_societe: int, telephone: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Client.id_client).where(Client.telephone == telephone)
        if await db.scalar(ClientService._scoped(query, id_societe, exclude_id)) is not None:
            raise ConflictError(f"Un client avec le téléphone '{telephone}' existe déjà.")

    @staticmethod
    async def _ensure_unique_email(
        db: AsyncSession, id_societe: int, email: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Client.id_client).where(
            Client.email.is_not(None), func.lower(Client.email) == email.lower()
        )
        if await db.scalar(ClientService._scoped(query, id_societe, exclude_id)) is not None:
            raise ConflictError(f"Un client avec l'email '{email}' existe déjà.")
