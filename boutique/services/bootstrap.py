"""
services/bootstrap.py
---------------------
Default data for a fresh database.

Runs once from the application lifespan (see main.py) when
SEED_DEFAULT_DATA is enabled. Nothing happens if the Roles table already
holds a row, whatever its societe. The caller owns the transaction.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.core.config import settings
from boutique.core.logging import get_logger
from boutique.core.security import hash_password
from boutique.models import Role, Societe, User

logger = get_logger(__name__)

DEFAULT_SOCIETE_NAME = "Société Par Défaut"

DEFAULT_ROLES = (
    ("ADMIN", "Administrateur avec tous les droits"),
    ("MANAGER", "Gestionnaire avec droits de gestion"),
    ("STAFF", "Employé avec droits de base"),
)


async def seed_default_data(db: AsyncSession) -> bool:
    """
    Create the default societe, roles and (optionally) admin user.

    Returns True when data was written, False when the database was
    already initialised. Database errors propagate to the caller.
    """
    roles_count = await db.scalar(select(func.count()).select_from(Role))
    if roles_count:
        logger.info("Default data already present", roles=roles_count)
        return False

    societe = await db.scalar(select(Societe).order_by(Societe.id_societe).limit(1))
    if societe is None:
        societe = Societe(
            nom_societe=DEFAULT_SOCIETE_NAME,
            description="Société créée par défaut lors de l'initialisation",
            actif=True,
        )
        db.add(societe)
        await db.flush()
        logger.info("Default societe created", id_societe=societe.id_societe)

    roles = {
        nom: Role(id_societe=societe.id_societe, nom_role=nom, description=description, actif=True)
        for nom, description in DEFAULT_ROLES
    }
    db.add_all(roles.values())
    await db.flush()
    logger.info("Default roles created", id_societe=societe.id_societe, roles=sorted(roles))

    if settings.DEFAULT_ADMIN_LOGIN and settings.DEFAULT_ADMIN_PASSWORD:
        admin = User(
            nom_complet="Administrateur",
            login=settings.DEFAULT_ADMIN_LOGIN,
            mot_de_passe_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
            actif=True,
            role=roles["ADMIN"],
        )
        db.add(admin)
        await db.flush()
        logger.info("Default admin user created", login=admin.login)

    return True
