import pytest

from boutique.core.exceptions import ConflictError, ValidationFailed
from boutique.models import Categorie
from boutique.schemas.role import RoleCreate, RoleUpdate
from boutique.schemas.societe import SocieteCreate, SocieteUpdate
from boutique.schemas.user import UserCreate
from boutique.services.role_service import RoleService
from boutique.services.societe_service import SocieteService
from boutique.services.user_service import UserService


# ── Roles ─────────────────────────────────────────────────────────────────────

async def test_role_name_unique_within_societe(db, role, societe, other_societe):
    with pytest.raises(ConflictError):
        await RoleService.create_role(db, societe.id_societe, RoleCreate(nom_role="admin"))
    created = await RoleService.create_role(db, other_societe.id_societe, RoleCreate(nom_role="ADMIN"))
    assert created.id_societe == other_societe.id_societe


async def test_role_delete_without_users(db, societe):
    created = await RoleService.create_role(db, societe.id_societe, RoleCreate(nom_role="STAFF"))
    assert await RoleService.delete_role(db, societe.id_societe, created.id_role) is True


async def test_role_delete_with_users_conflicts(db, user, role, societe):
    with pytest.raises(ConflictError):
        await RoleService.delete_role(db, societe.id_societe, role.id_role)


async def test_role_update_and_toggle(db, role, societe):
    updated = await RoleService.update_role(
        db, societe.id_societe, role.id_role, RoleUpdate(description="Tous les droits")
    )
    assert updated.description == "Tous les droits"
    assert updated.nom_role == "ADMIN"

    assert await RoleService.toggle_role_status(db, societe.id_societe, role.id_role)
    assert await RoleService.list_roles(db, societe.id_societe) == []


async def test_users_by_role(db, user, role, societe, other_societe):
    users = await RoleService.list_users_by_role(db, societe.id_societe, role.id_role)
    assert [u.login for u in users] == ["amina"]
    assert await RoleService.list_users_by_role(db, other_societe.id_societe, role.id_role) is None


# ── Users ─────────────────────────────────────────────────────────────────────

async def test_create_user_hashes_password(db, role, societe):
    created = await UserService.create_user(
        db,
        societe.id_societe,
        UserCreate(nom_complet="Youssef Tazi", login="youssef", password="secret-pass", id_role=role.id_role),
    )
    assert created.role.nom_role == "ADMIN"

    authenticated = await UserService.authenticate(db, "youssef", "secret-pass")
    assert authenticated is not None
    assert authenticated.mot_de_passe_hash != "secret-pass"
    assert await UserService.authenticate(db, "youssef", "wrong-pass") is None


async def test_create_user_duplicate_login(db, user, role, societe):
    with pytest.raises(ConflictError):
        await UserService.create_user(
            db,
            societe.id_societe,
            UserCreate(nom_complet="Autre", login="amina", password="secret-pass", id_role=role.id_role),
        )


async def test_create_user_with_foreign_role(db, role, other_societe):
    with pytest.raises(ValidationFailed):
        await UserService.create_user(
            db,
            other_societe.id_societe,
            UserCreate(nom_complet="Intrus", login="intrus", password="secret-pass", id_role=role.id_role),
        )


async def test_users_listed_per_societe(db, user, societe, other_societe):
    assert [u.login for u in await UserService.list_users(db, societe.id_societe)] == ["amina"]
    assert await UserService.list_users(db, other_societe.id_societe) == []
    assert await UserService.get_user(db, other_societe.id_societe, user.id_utilisateur) is None


# ── Societes ──────────────────────────────────────────────────────────────────

async def test_societe_name_unique(db, societe):
    with pytest.raises(ConflictError):
        await SocieteService.create_societe(db, SocieteCreate(nom_societe="caftans de fès"))


async def test_societe_update_and_toggle(db, societe):
    updated = await SocieteService.update_societe(
        db, societe.id_societe, SocieteUpdate(telephone="0535000000")
    )
    assert updated.telephone == "0535000000"
    assert updated.nom_societe == "Caftans de Fès"

    assert await SocieteService.toggle_societe_status(db, societe.id_societe)
    assert await SocieteService.list_societes(db) == []
    assert len(await SocieteService.list_societes(db, include_inactive=True)) == 1


async def test_societe_with_data_cannot_be_deleted(db, societe):
    db.add(Categorie(id_societe=societe.id_societe, nom_categorie="Caftan"))
    await db.flush()

    with pytest.raises(ConflictError):
        await SocieteService.delete_societe(db, societe.id_societe)


async def test_empty_societe_deleted(db, other_societe):
    assert await SocieteService.delete_societe(db, other_societe.id_societe) is True
    assert await SocieteService.get_societe(db, other_societe.id_societe) is None
