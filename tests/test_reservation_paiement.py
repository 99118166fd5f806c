from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from boutique.core.exceptions import ConflictError, ValidationFailed
from boutique.models import Paiement, Reservation, StatutReservation
from boutique.schemas.paiement import PaiementCreate, PaiementUpdate
from boutique.schemas.reservation import ReservationCreate, ReservationUpdate
from boutique.services.paiement_service import PaiementService
from boutique.services.reservation_service import ReservationService


def _reservation(customer, **overrides) -> ReservationCreate:
    fields = dict(
        id_client=customer.id_client,
        date_debut=datetime(2026, 7, 10, 9, 0),
        date_fin=datetime(2026, 7, 12, 20, 0),
        montant_total=Decimal("2000.00"),
    )
    fields.update(overrides)
    return ReservationCreate(**fields)


async def _stored_back_reference(db, id_reservation):
    return await db.scalar(
        select(Reservation.id_paiement).where(Reservation.id_reservation == id_reservation)
    )


# ── Reservations ──────────────────────────────────────────────────────────────

async def test_create_reservation_defaults(db, societe, customer):
    created = await ReservationService.create_reservation(db, societe.id_societe, _reservation(customer))

    assert created.statut_reservation == StatutReservation.EnAttente
    assert created.remise_appliquee == Decimal("0.00")
    assert created.client.id_client == customer.id_client
    assert created.paiement is None


@pytest.mark.parametrize("fin", [datetime(2026, 7, 10, 9, 0), datetime(2026, 7, 1)])
async def test_reservation_dates_must_be_ordered(db, societe, customer, fin):
    with pytest.raises(ValidationFailed):
        await ReservationService.create_reservation(
            db, societe.id_societe, _reservation(customer, date_fin=fin)
        )


async def test_update_checks_dates_against_stored_values(db, societe, reservation):
    with pytest.raises(ValidationFailed):
        await ReservationService.update_reservation(
            db,
            societe.id_societe,
            reservation.id_reservation,
            ReservationUpdate(date_debut=datetime(2026, 6, 5)),
        )


async def test_reservation_client_must_belong_to_tenant(db, customer, other_societe):
    with pytest.raises(ValidationFailed):
        await ReservationService.create_reservation(
            db, other_societe.id_societe, _reservation(customer)
        )


async def test_list_reservations_by_statut(db, societe, reservation):
    assert await ReservationService.update_reservation_status(
        db, societe.id_societe, reservation.id_reservation, StatutReservation.Confirmee
    )
    confirmed = await ReservationService.list_reservations(
        db, societe.id_societe, StatutReservation.Confirmee
    )
    assert [r.id_reservation for r in confirmed] == [reservation.id_reservation]
    assert await ReservationService.list_reservations(
        db, societe.id_societe, StatutReservation.Annulee
    ) == []


async def test_status_change_on_unknown_reservation(db, societe):
    assert await ReservationService.update_reservation_status(
        db, societe.id_societe, 4242, StatutReservation.Terminee
    ) is False


# ── Paiements ─────────────────────────────────────────────────────────────────

async def test_create_paiement_sets_back_reference(db, societe, reservation):
    paiement = await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00")),
    )

    assert paiement.date_paiement is not None
    assert await _stored_back_reference(db, reservation.id_reservation) == paiement.id_paiement
    loaded = await ReservationService.get_reservation(db, societe.id_societe, reservation.id_reservation)
    assert loaded.paiement.montant == Decimal("500.00")


async def test_second_paiement_for_reservation_conflicts(db, societe, reservation):
    data = PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00"))
    await PaiementService.create_paiement(db, societe.id_societe, data)

    with pytest.raises(ConflictError):
        await PaiementService.create_paiement(db, societe.id_societe, data)


async def test_paiement_for_foreign_reservation_rejected(db, reservation, other_societe):
    with pytest.raises(ValidationFailed):
        await PaiementService.create_paiement(
            db,
            other_societe.id_societe,
            PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("10")),
        )


async def test_failed_back_reference_leaves_no_paiement(
    session_factory, societe, reservation, monkeypatch
):
    async def broken(*args, **kwargs):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(PaiementService, "_set_back_reference", staticmethod(broken))

    async with session_factory() as session:
        with pytest.raises(RuntimeError):
            await PaiementService.create_paiement(
                session,
                societe.id_societe,
                PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500")),
            )
        await session.rollback()

    async with session_factory() as session:
        assert await session.scalar(select(func.count()).select_from(Paiement)) == 0
        assert await _stored_back_reference(session, reservation.id_reservation) is None


async def test_move_paiement_to_another_reservation(db, societe, customer, reservation):
    paiement = await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00")),
    )
    other = await ReservationService.create_reservation(db, societe.id_societe, _reservation(customer))

    moved = await PaiementService.update_paiement(
        db, societe.id_societe, paiement.id_paiement, PaiementUpdate(id_reservation=other.id_reservation)
    )

    assert moved.id_reservation == other.id_reservation
    assert await _stored_back_reference(db, reservation.id_reservation) is None
    assert await _stored_back_reference(db, other.id_reservation) == paiement.id_paiement


async def test_delete_paiement_clears_back_reference(db, societe, reservation):
    paiement = await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00")),
    )

    assert await PaiementService.delete_paiement(db, societe.id_societe, paiement.id_paiement)
    assert await _stored_back_reference(db, reservation.id_reservation) is None
    assert await PaiementService.list_paiements(db, societe.id_societe) == []


async def test_reservation_delete_blocked_by_paiement(db, societe, reservation):
    await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00")),
    )
    with pytest.raises(ConflictError):
        await ReservationService.delete_reservation(db, societe.id_societe, reservation.id_reservation)


async def test_list_paiements_filtered_by_reservation(db, societe, customer, reservation):
    other = await ReservationService.create_reservation(db, societe.id_societe, _reservation(customer))
    for target in (reservation.id_reservation, other.id_reservation):
        await PaiementService.create_paiement(
            db, societe.id_societe, PaiementCreate(id_reservation=target, montant=Decimal("100"))
        )

    listed = await PaiementService.list_paiements(db, societe.id_societe, other.id_reservation)
    assert [p.id_reservation for p in listed] == [other.id_reservation]


# ── Linking from the reservation side ─────────────────────────────────────────

async def test_link_paiement_from_reservation_repoints_it(db, societe, customer, reservation):
    paiement = await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00")),
    )

    created = await ReservationService.create_reservation(
        db, societe.id_societe, _reservation(customer, id_paiement=paiement.id_paiement)
    )

    assert created.id_paiement == paiement.id_paiement
    assert created.paiement.id_reservation == created.id_reservation
    assert await _stored_back_reference(db, reservation.id_reservation) is None


async def test_explicit_null_unlinks_back_reference_only(db, societe, reservation):
    paiement = await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00")),
    )

    updated = await ReservationService.update_reservation(
        db,
        societe.id_societe,
        reservation.id_reservation,
        ReservationUpdate.model_validate({"idPaiement": None}),
    )

    assert updated.id_paiement is None
    still_there = await PaiementService.get_paiement(db, societe.id_societe, paiement.id_paiement)
    assert still_there.id_reservation == reservation.id_reservation


async def test_link_unknown_paiement_rejected(db, societe, reservation):
    with pytest.raises(ValidationFailed):
        await ReservationService.update_reservation(
            db, societe.id_societe, reservation.id_reservation, ReservationUpdate(id_paiement=999)
        )


async def test_reservation_with_paiement_cannot_take_another(db, societe, customer, reservation):
    first = await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=reservation.id_reservation, montant=Decimal("500.00")),
    )
    other = await ReservationService.create_reservation(db, societe.id_societe, _reservation(customer))
    second = await PaiementService.create_paiement(
        db,
        societe.id_societe,
        PaiementCreate(id_reservation=other.id_reservation, montant=Decimal("100.00")),
    )
    assert first.id_paiement != second.id_paiement

    with pytest.raises(ConflictError):
        await ReservationService.update_reservation(
            db,
            societe.id_societe,
            reservation.id_reservation,
            ReservationUpdate(id_paiement=second.id_paiement),
        )


async def test_one_second_apart_is_enough(db, societe, customer):
    created = await ReservationService.create_reservation(
        db,
        societe.id_societe,
        _reservation(customer, date_debut=datetime(2026, 7, 10, 9, 0, 0), date_fin=datetime(2026, 7, 10, 9, 0, 1)),
    )
    assert created.date_fin > created.date_debut
