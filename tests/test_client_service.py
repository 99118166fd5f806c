import pytest

from boutique.core.config import settings
from boutique.core.exceptions import ConflictError
from boutique.schemas.client import ClientCreate, ClientUpdate
from boutique.services.client_service import ClientService


def _client(**overrides) -> ClientCreate:
    fields = dict(nom_client="Bennani", prenom_client="Kenza", telephone="0661000000")
    fields.update(overrides)
    return ClientCreate(**fields)


async def test_create_client_assigns_tenant_and_counters(db, societe):
    created = await ClientService.create_client(db, societe.id_societe, _client())

    assert created.id_societe == societe.id_societe
    assert created.total_commandes == 0
    assert created.date_creation_fiche is not None


async def test_phone_unique_across_societes_by_default(db, customer, other_societe):
    with pytest.raises(ConflictError):
        await ClientService.create_client(
            db, other_societe.id_societe, _client(telephone=customer.telephone)
        )


async def test_email_unique_case_insensitive(db, customer, societe):
    with pytest.raises(ConflictError):
        await ClientService.create_client(
            db, societe.id_societe, _client(email=customer.email.upper())
        )


async def test_societe_scope_allows_reuse_elsewhere(db, customer, societe, other_societe, monkeypatch):
    monkeypatch.setattr(settings, "CLIENT_UNIQUENESS_SCOPE", "societe")

    created = await ClientService.create_client(
        db, other_societe.id_societe, _client(telephone=customer.telephone)
    )
    assert created.telephone == customer.telephone
    with pytest.raises(ConflictError):
        await ClientService.create_client(db, societe.id_societe, _client(telephone=customer.telephone))


async def test_update_keeps_own_phone(db, customer, societe):
    updated = await ClientService.update_client(
        db,
        societe.id_societe,
        customer.id_client,
        ClientUpdate(telephone=customer.telephone, adresse_principale="Derb Sidi Bouloukat, Fès"),
    )
    assert updated.adresse_principale == "Derb Sidi Bouloukat, Fès"


async def test_delete_blocked_by_reservations(db, reservation, societe):
    with pytest.raises(ConflictError):
        await ClientService.delete_client(db, societe.id_societe, reservation.id_client)


async def test_delete_without_reservations(db, customer, societe):
    assert await ClientService.delete_client(db, societe.id_societe, customer.id_client) is True
    assert await ClientService.get_client(db, societe.id_societe, customer.id_client) is None


async def test_increment_total_commandes(db, customer, societe, other_societe):
    assert await ClientService.increment_total_commandes(db, societe.id_societe, customer.id_client)
    assert await ClientService.increment_total_commandes(db, societe.id_societe, customer.id_client)
    assert (await ClientService.get_client(db, societe.id_societe, customer.id_client)).total_commandes == 2

    assert await ClientService.increment_total_commandes(
        db, other_societe.id_societe, customer.id_client
    ) is False


async def test_list_orders_by_name_and_hides_inactive(db, societe):
    await ClientService.create_client(db, societe.id_societe, _client(nom_client="Ziani", telephone="1"))
    await ClientService.create_client(db, societe.id_societe, _client(nom_client="Amrani", telephone="2"))
    hidden = await ClientService.create_client(
        db, societe.id_societe, _client(nom_client="Chraibi", telephone="3", actif=False)
    )

    names = [c.nom_client for c in await ClientService.list_clients(db, societe.id_societe)]
    assert names == ["Amrani", "Ziani"]
    everyone = await ClientService.list_clients(db, societe.id_societe, include_inactive=True)
    assert hidden.id_client in {c.id_client for c in everyone}
