"""
services/user_service.py
------------------------
Business logic for user creation, authentication, and listing.

Users carry no id_societe of their own; every tenant-scoped query joins
through Roles.id_societe.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.exceptions import ConflictError, ValidationFailed
from boutique.core.logging import get_logger
from boutique.core.security import hash_password, verify_password
from boutique.core.tenant import require_tenant
from boutique.models import Role, User
from boutique.schemas.user import UserCreate, UserRead

logger = get_logger(__name__)


class UserService:

    @staticmethod
    async def create_user(
        db: AsyncSession, id_societe: Optional[int], data: UserCreate
    ) -> UserRead:
        """
        Create a user holding one of the caller's societe roles.
        Raises ConflictError on duplicate login, ValidationFailed when the
        role is unknown in this societe.
        """
        id_societe = require_tenant(id_societe, "create_user")

        role = await db.scalar(
            select(Role).where(Role.id_role == data.id_role, Role.id_societe == id_societe)
        )
        if role is None:
            raise ValidationFailed(
                f"Le rôle avec l'ID {data.id_role} n'existe pas pour cette société."
            )

        existing = await db.scalar(select(User.id_utilisateur).where(User.login == data.login))
        if existing is not None:
            raise ConflictError(f"Le login '{data.login}' est déjà utilisé.")

        user = User(
            nom_complet=data.nom_complet,
            login=data.login,
            mot_de_passe_hash=hash_password(data.password),
            email=data.email.lower() if data.email else None,
            telephone=data.telephone,
            actif=data.actif,
            role=role,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(
            "User created",
            id_utilisateur=user.id_utilisateur,
            id_role=role.id_role,
            id_societe=id_societe,
        )
        return UserRead.model_validate(user)

    @staticmethod
    async def list_users(db: AsyncSession, id_societe: Optional[int]) -> list[UserRead]:
        id_societe = require_tenant(id_societe, "list_users")
        result = await db.execute(
            select(User)
            .join(User.role)
            .where(Role.id_societe == id_societe)
            .order_by(User.nom_complet, User.id_utilisateur)
        )
        return [UserRead.model_validate(u) for u in result.scalars().all()]

    @staticmethod
    async def get_user(
        db: AsyncSession, id_societe: Optional[int], id_utilisateur: int
    ) -> Optional[UserRead]:
        id_societe = require_tenant(id_societe, "get_user")
        result = await db.execute(
            select(User)
            .join(User.role)
            .where(User.id_utilisateur == id_utilisateur, Role.id_societe == id_societe)
        )
        user = result.scalar_one_or_none()
        return None if user is None else UserRead.model_validate(user)

    @staticmethod
    async def get_by_id(db: AsyncSession, id_utilisateur: int) -> Optional[User]:
        return await db.get(User, id_utilisateur)

    @staticmethod
    async def authenticate(db: AsyncSession, login: str, password: str) -> Optional[User]:
        """
        Verify credentials and return the User if valid and active, else None.
        """
        result = await db.execute(select(User).where(User.login == login))
        user = result.scalar_one_or_none()
        if user is None or not user.actif:
            return None
        if not verify_password(password, user.mot_de_passe_hash):
            return None
        return user
