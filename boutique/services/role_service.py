"""
services/role_service.py
------------------------
Business logic for roles.

Critical security invariant:
  Every query includes id_societe in the WHERE clause. A role id that
  belongs to another societe behaves exactly like a missing one.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.exceptions import ConflictError
from boutique.core.logging import get_logger
from boutique.core.tenant import require_tenant
from boutique.models import Role, User
from boutique.schemas.role import RoleCreate, RoleRead, RoleUpdate
from boutique.schemas.user import UserRead

logger = get_logger(__name__)


class RoleService:

    @staticmethod
    async def list_roles(
        db: AsyncSession, id_societe: Optional[int], include_inactive: bool = False
    ) -> list[RoleRead]:
        id_societe = require_tenant(id_societe, "list_roles")
        query = select(Role).where(Role.id_societe == id_societe)
        if not include_inactive:
            query = query.where(Role.actif.is_(True))
        result = await db.execute(query.order_by(Role.nom_role, Role.id_role))
        return [RoleRead.model_validate(r) for r in result.scalars().all()]

    @staticmethod
    async def get_role(
        db: AsyncSession, id_societe: Optional[int], id_role: int
    ) -> Optional[RoleRead]:
        id_societe = require_tenant(id_societe, "get_role")
        role = await RoleService._get_scoped(db, id_societe, id_role)
        return None if role is None else RoleRead.model_validate(role)

    @staticmethod
    async def create_role(
        db: AsyncSession, id_societe: Optional[int], data: RoleCreate
    ) -> RoleRead:
        """
        Create a role in the caller's societe.
        Raises ConflictError if the name already exists there (case-insensitive).
        """
        id_societe = require_tenant(id_societe, "create_role")
        await RoleService._ensure_unique_name(db, id_societe, data.nom_role)

        role = Role(id_societe=id_societe, **data.model_dump())
        db.add(role)
        await db.flush()
        await db.refresh(role)

        logger.info("Role created", id_role=role.id_role, nom=role.nom_role, id_societe=id_societe)
        return RoleRead.model_validate(role)

    @staticmethod
    async def update_role(
        db: AsyncSession, id_societe: Optional[int], id_role: int, data: RoleUpdate
    ) -> Optional[RoleRead]:
        id_societe = require_tenant(id_societe, "update_role")
        role = await RoleService._get_scoped(db, id_societe, id_role)
        if role is None:
            return None

        changes = data.patch()
        if "nom_role" in changes:
            await RoleService._ensure_unique_name(
                db, id_societe, changes["nom_role"], exclude_id=id_role
            )

        for field, value in changes.items():
            setattr(role, field, value)
        await db.flush()

        logger.info("Role updated", id_role=id_role, id_societe=id_societe)
        return RoleRead.model_validate(role)

    @staticmethod
    async def delete_role(db: AsyncSession, id_societe: Optional[int], id_role: int) -> bool:
        """
        Delete a role nobody uses.
        Raises ConflictError while at least one user still references it.
        """
        id_societe = require_tenant(id_societe, "delete_role")
        role = await RoleService._get_scoped(db, id_societe, id_role)
        if role is None:
            return False

        users = await db.scalar(
            select(func.count()).select_from(User).where(User.id_role == id_role)
        )
        if users:
            raise ConflictError(
                f"Le rôle '{role.nom_role}' ne peut pas être supprimé car il est "
                f"utilisé par {users} utilisateur(s)."
            )

        await db.delete(role)
        await db.flush()

        logger.info("Role deleted", id_role=id_role, id_societe=id_societe)
        return True

    @staticmethod
    async def toggle_role_status(
        db: AsyncSession, id_societe: Optional[int], id_role: int
    ) -> bool:
        id_societe = require_tenant(id_societe, "toggle_role_status")
        role = await RoleService._get_scoped(db, id_societe, id_role)
        if role is None:
            return False

        role.actif = not role.actif
        await db.flush()

        logger.info("Role status toggled", id_role=id_role, actif=role.actif)
        return True

    @staticmethod
    async def list_users_by_role(
        db: AsyncSession, id_societe: Optional[int], id_role: int
    ) -> Optional[list[UserRead]]:
        """Users holding the role, or None when the role is not visible."""
        id_societe = require_tenant(id_societe, "list_users_by_role")
        if await RoleService._get_scoped(db, id_societe, id_role) is None:
            return None

        result = await db.execute(
            select(User).where(User.id_role == id_role).order_by(User.nom_complet)
        )
        return [UserRead.model_validate(u) for u in result.scalars().all()]

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _get_scoped(db: AsyncSession, id_societe: int, id_role: int) -> Optional[Role]:
        result = await db.execute(
            select(Role).where(Role.id_role == id_role, Role.id_societe == id_societe)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _ensure_unique_name(
        db: AsyncSession, id_societe: int, nom: str, exclude_id: Optional[int] = None
    ) -> None:
        query = select(Role.id_role).where(
            Role.id_societe == id_societe, func.lower(Role.nom_role) == nom.lower()
        )
        if exclude_id is not None:
            query = query.where(Role.id_role != exclude_id)
        if await db.scalar(query.limit(1)) is not None:
            raise ConflictError(f"Un rôle avec le nom '{nom}' existe déjà dans cette société.")
