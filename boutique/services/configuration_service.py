"""
services/configuration_service.py
---------------------------------
Per-societe configuration documents.

`data` is kept verbatim as text; the only rule applied to it is that it
must parse as JSON, checked before anything is written.
"""

import json
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.exceptions import ConflictError, ValidationFailed
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Configuration
from boutique.schemas.configuration import (
    ConfigurationCreate,
    ConfigurationRead,
    ConfigurationUpdate,
)

logger = get_logger(__name__)


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


class ConfigurationService:

    @staticmethod
    def validate_json(text: Optional[str]) -> bool:
        """True when `text` is syntactically valid JSON. Never raises."""
        if text is None or not text.strip():
            return False
        try:
            json.loads(text, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            return False
        return True

    @staticmethod
    async def list_configurations(
        db: AsyncSession, id_societe: Optional[int]
    ) -> list[ConfigurationRead]:
        id_societe = require_tenant(id_societe, "list_configurations")
        result = await db.execute(
            select(Configuration)
            .where(Configuration.id_societe == id_societe)
            .order_by(Configuration.cle)
        )
        return [ConfigurationRead.model_validate(c) for c in result.scalars().all()]

    @staticmethod
    async def get_configuration(
        db: AsyncSession, id_societe: Optional[int], id_configuration: int
    ) -> Optional[ConfigurationRead]:
        id_societe = require_tenant(id_societe, "get_configuration")
        configuration = await ConfigurationService._get_scoped(db, id_societe, id_configuration)
        return None if configuration is None else ConfigurationRead.model_validate(configuration)

    @staticmethod
    async def get_configuration_by_cle(
        db: AsyncSession, id_societe: Optional[int], cle: str
    ) -> Optional[ConfigurationRead]:
        id_societe = require_tenant(id_societe, "get_configuration_by_cle")
        result = await db.execute(
            select(Configuration).where(
                Configuration.cle == cle, Configuration.id_societe == id_societe
            )
        )
        configuration = result.scalar_one_or_none()
        return None if configuration is None else ConfigurationRead.model_validate(configuration)

    @staticmethod
    async def create_configuration(
        db: AsyncSession, id_societe: Optional[int], data: ConfigurationCreate
    ) -> ConfigurationRead:
        """
        Store a configuration document under a key.

        Raises:
            ValidationFailed: `data` is not valid JSON.
            ConflictError: The key already exists for this societe.
        """
        id_societe = require_tenant(id_societe, "create_configuration")
        ConfigurationService._check_json(data.data)
        await ConfigurationService._ensure_unique_cle(db, id_societe, data.cle)

        configuration = Configuration(id_societe=id_societe, cle=data.cle, data=data.data)
        db.add(configuration)
        await db.flush()
        await db.refresh(configuration)

        logger.info(
            "Configuration created",
            id_configuration=configuration.id_configuration,
            cle=configuration.cle,
            id_societe=id_societe,
        )
        return ConfigurationRead.model_validate(configuration)

    @staticmethod
    async def update_configuration(
        db: AsyncSession,
        id_societe: Optional[int],
        id_configuration: int,
        data: ConfigurationUpdate,
    ) -> Optional[ConfigurationRead]:
        id_societe = require_tenant(id_societe, "update_configuration")
        changes = data.patch()
        if "data" in changes:
            ConfigurationService._check_json(changes["data"])

        configuration = await ConfigurationService._get_scoped(db, id_societe, id_configuration)
        if configuration is None:
            return None

        if "cle" in changes:
            await ConfigurationService._ensure_unique_cle(
                db, id_societe, changes["cle"], exclude_id=id_configuration
            )

        for field, value in changes.items():
            setattr(configuration, field, value)
        configuration.date_modification = datetime.now(timezone.utc).replace(tzinfo=None)
        await db.flush()

        logger.info(
            "Configuration updated",
            id_configuration=id_configuration,
            fields=sorted(changes),
        )
        return ConfigurationRead.model_validate(configuration)

    @staticmethod
    async def delete_configuration(
        db: AsyncSession, id_societe: Optional[int], id_configuration: int
    ) -> bool:
        id_societe = require_tenant(id_societe, "delete_configuration")
        configuration = await ConfigurationService._get_scoped(db, id_societe, id_configuration)
        if configuration is None:
            return False

        await db.delete(configuration)
        await db.flush()

        logger.info(
            "Configuration deleted", id_configuration=id_configuration, id_societe=id_societe
        )
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    def _check_json(text: str) -> None:
        if not ConfigurationService.validate_json(text):
            raise ValidationFailed("Le champ Data doit contenir un JSON valide.")

    @staticmethod
    async def _get_scoped(
        db: AsyncSession, id_societe: int, id_configuration: int
    ) -> Optional[Configuration]:
        result = await db.execute(
            select(Configuration).where(
                Configuration.id_configuration == id_configuration,
                Configuration.id_societe == id_societe,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _ensure_unique_cle(
        db: AsyncSession, id_societe: int, cle: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Configuration.id_configuration).where(
            Configuration.id_societe == id_societe, Configuration.cle == cle
        )
        if exclude_id is not None:
            query = query.where(Configuration.id_configuration != exclude_id)
        if await db.scalar(query.limit(1)) is not None:
            raise ConflictError(f"Une configuration avec la clé '{cle}' existe déjà.")
