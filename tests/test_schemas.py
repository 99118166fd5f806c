from decimal import Decimal

import pytest
from pydantic import ValidationError

from boutique.schemas.article import ArticleCreate, ArticleUpdate
from boutique.schemas.configuration import ValidateJsonResponse
from boutique.schemas.paiement import PaiementCreate
from boutique.schemas.reservation import ReservationUpdate
from boutique.schemas.taille import TailleCreate


def test_camel_case_and_snake_case_input():
    camel = ArticleCreate.model_validate(
        {
            "nomArticle": "Caftan velours",
            "description": "Velours bordeaux",
            "prixLocationBase": "800",
            "prixAvanceBase": "200",
            "idCategorie": 1,
        }
    )
    snake = ArticleCreate.model_validate(
        {
            "nom_article": "Caftan velours",
            "description": "Velours bordeaux",
            "prix_location_base": "800",
            "prix_avance_base": "200",
            "id_categorie": 1,
        }
    )
    assert camel == snake
    assert camel.prix_location_base == Decimal("800")


def test_money_serializes_as_number():
    data = PaiementCreate(id_reservation=1, montant=Decimal("500.50")).model_dump(
        mode="json", by_alias=True
    )
    assert data["montant"] == 500.5
    assert data["idReservation"] == 1


def test_patch_ignores_absent_fields():
    assert ArticleUpdate.model_validate({"couleur": "Rouge"}).patch() == {"couleur": "Rouge"}


def test_patch_ignores_null_on_regular_fields():
    assert ArticleUpdate.model_validate({"couleur": None, "nomArticle": None}).patch() == {}


def test_patch_null_clears_optional_foreign_key():
    assert ArticleUpdate.model_validate({"idTaille": None}).patch() == {"id_taille": None}
    assert ReservationUpdate.model_validate({"idPaiement": None}).patch() == {"id_paiement": None}


@pytest.mark.parametrize("montant", ["0", "-10"])
def test_paiement_amount_must_be_positive(montant):
    with pytest.raises(ValidationError):
        PaiementCreate(id_reservation=1, montant=montant)


def test_length_limits_enforced():
    with pytest.raises(ValidationError):
        TailleCreate.model_validate({"taille": "X" * 51})


def test_strings_are_stripped():
    assert TailleCreate.model_validate({"taille": "  XL "}).libelle == "XL"


def test_validate_json_response_alias():
    body = ValidateJsonResponse(is_valid=True, message="ok").model_dump(by_alias=True)
    assert body == {"isValid": True, "message": "ok"}


def test_smallest_positive_amount_accepted():
    assert PaiementCreate(id_reservation=1, montant="0.01").montant == Decimal("0.01")
