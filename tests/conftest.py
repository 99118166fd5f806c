"""
Shared fixtures.

Settings are read at import time, so the environment is prepared before
anything from boutique is imported. Every test gets its own in-memory
SQLite database (StaticPool keeps the single connection alive).
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SEED_DEFAULT_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from boutique.core.security import create_access_token, hash_password  # noqa: E402
from boutique.db.session import get_db  # noqa: E402
from boutique.models import (  # noqa: E402
    Base,
    Categorie,
    Client,
    Reservation,
    Role,
    Societe,
    Taille,
    User,
)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ── Data ──────────────────────────────────────────────────────────────────────

async def _persist(session_factory, *rows):
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()
    return rows


@pytest.fixture
async def societe(session_factory):
    (row,) = await _persist(session_factory, Societe(nom_societe="Caftans de Fès", actif=True))
    return row


@pytest.fixture
async def other_societe(session_factory):
    (row,) = await _persist(session_factory, Societe(nom_societe="Takchita Rabat", actif=True))
    return row


@pytest.fixture
async def role(session_factory, societe):
    (row,) = await _persist(
        session_factory,
        Role(id_societe=societe.id_societe, nom_role="ADMIN", description="", actif=True),
    )
    return row


@pytest.fixture
async def user(session_factory, role):
    (row,) = await _persist(
        session_factory,
        User(
            nom_complet="Amina Berrada",
            login="amina",
            mot_de_passe_hash=hash_password("motdepasse123"),
            id_role=role.id_role,
            actif=True,
        ),
    )
    return row


@pytest.fixture
async def categorie(session_factory, societe):
    (row,) = await _persist(
        session_factory,
        Categorie(id_societe=societe.id_societe, nom_categorie="Caftan", ordre_affichage=1),
    )
    return row


@pytest.fixture
async def taille(session_factory, societe):
    (row,) = await _persist(session_factory, Taille(id_societe=societe.id_societe, libelle="M"))
    return row


@pytest.fixture
async def customer(session_factory, societe):
    (row,) = await _persist(
        session_factory,
        Client(
            id_societe=societe.id_societe,
            nom_client="Alaoui",
            prenom_client="Salma",
            telephone="0612345678",
            email="salma@example.ma",
            total_commandes=0,
            actif=True,
        ),
    )
    return row


@pytest.fixture
async def reservation(session_factory, customer):
    (row,) = await _persist(
        session_factory,
        Reservation(
            id_societe=customer.id_societe,
            id_client=customer.id_client,
            date_debut=datetime(2026, 6, 1, 10, 0),
            date_fin=datetime(2026, 6, 3, 18, 0),
            montant_total=Decimal("1500.00"),
            remise_appliquee=Decimal("0.00"),
        ),
    )
    return row


# ── Auth ──────────────────────────────────────────────────────────────────────

def bearer(id_societe, subject: int = 1, login: str = "tester") -> dict:
    token = create_access_token(subject=subject, login=login, id_societe=id_societe)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(societe):
    return bearer(societe.id_societe)


@pytest.fixture
def headers_for():
    return bearer
