"""End-to-end checks through the HTTP layer (routing, auth, error bodies)."""

import pytest


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


async def test_requests_without_token_are_rejected(client):
    response = await client.get("/api/articles")
    assert response.status_code == 401
    assert "message" in response.json()


async def test_token_without_societe_is_missing_tenant(client, headers_for):
    response = await client.get("/api/categories", headers=headers_for(None))
    assert response.status_code == 401
    assert "IdSociete" in response.json()["message"]


async def test_garbage_token_rejected(client):
    response = await client.get("/api/clients", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


async def test_create_returns_201_with_location(client, auth_headers, societe):
    response = await client.post(
        "/api/categories",
        json={"nomCategorie": "Takchita", "ordreAffichage": 1},
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["nomCategorie"] == "Takchita"
    assert body["idSociete"] == societe.id_societe
    assert response.headers["Location"] == f"/api/categories/{body['idCategorie']}"


async def test_client_supplied_societe_is_ignored(client, auth_headers, societe, other_societe):
    response = await client.post(
        "/api/tailles",
        json={"taille": "XL", "idSociete": other_societe.id_societe},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["idSociete"] == societe.id_societe


async def test_shape_validation_is_400_with_message(client, auth_headers):
    response = await client.post("/api/categories", json={"description": "sans nom"}, headers=auth_headers)
    assert response.status_code == 400
    assert "nomCategorie" in response.json()["message"]


async def test_not_found_is_404_with_message(client, auth_headers):
    response = await client.get("/api/articles/9999", headers=auth_headers)
    assert response.status_code == 404
    assert "9999" in response.json()["message"]


async def test_conflict_is_409(client, auth_headers, categorie):
    response = await client.post(
        "/api/categories", json={"nomCategorie": "caftan"}, headers=auth_headers
    )
    assert response.status_code == 409
    assert "existe déjà" in response.json()["message"]


async def test_other_societe_sees_404(client, headers_for, categorie, other_societe):
    response = await client.get(
        f"/api/categories/{categorie.id_categorie}",
        headers=headers_for(other_societe.id_societe),
    )
    assert response.status_code == 404


async def test_article_lifecycle(client, auth_headers, categorie, taille):
    created = await client.post(
        "/api/articles",
        json={
            "nomArticle": "Caftan Mansouria",
            "description": "Brocart et sfifa",
            "prixLocationBase": 1500,
            "prixAvanceBase": 400.5,
            "idCategorie": categorie.id_categorie,
            "idTaille": taille.id_taille,
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    article = created.json()
    assert article["prixAvanceBase"] == 400.5
    assert article["taille"]["taille"] == "M"
    assert article["categorie"]["nomCategorie"] == "Caftan"

    url = f"/api/articles/{article['idArticle']}"
    updated = await client.put(url, json={"idTaille": None}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["idTaille"] is None
    assert updated.json()["nomArticle"] == "Caftan Mansouria"

    toggled = await client.patch(f"{url}/actif", headers=auth_headers)
    assert toggled.json()["actif"] is False

    deleted = await client.delete(url, headers=auth_headers)
    assert deleted.status_code == 200
    assert "message" in deleted.json()
    assert (await client.get(url, headers=auth_headers)).status_code == 404


async def test_reservation_and_paiement_flow(client, auth_headers, customer):
    created = await client.post(
        "/api/reservations",
        json={
            "idClient": customer.id_client,
            "dateDebut": "2026-08-01T10:00:00",
            "dateFin": "2026-08-02T18:00:00",
            "montantTotal": 1800,
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    reservation = created.json()
    assert reservation["statutReservation"] == "EnAttente"
    assert reservation["client"]["nomClient"] == "Alaoui"

    paiement = await client.post(
        "/api/paiements",
        json={"idReservation": reservation["idReservation"], "montant": 600, "methodePaiement": "Espèces"},
        headers=auth_headers,
    )
    assert paiement.status_code == 201

    url = f"/api/reservations/{reservation['idReservation']}"
    loaded = (await client.get(url, headers=auth_headers)).json()
    assert loaded["idPaiement"] == paiement.json()["idPaiement"]
    assert loaded["paiement"]["montant"] == 600

    again = await client.post(
        "/api/paiements",
        json={"idReservation": reservation["idReservation"], "montant": 100},
        headers=auth_headers,
    )
    assert again.status_code == 409

    status = await client.patch(f"{url}/statut", json={"statut": "Confirmee"}, headers=auth_headers)
    assert status.json()["statutReservation"] == "Confirmee"

    filtered = await client.get("/api/reservations", params={"statut": "Confirmee"}, headers=auth_headers)
    assert [r["idReservation"] for r in filtered.json()] == [reservation["idReservation"]]


async def test_reservation_with_inverted_dates_is_400(client, auth_headers, customer):
    response = await client.post(
        "/api/reservations",
        json={
            "idClient": customer.id_client,
            "dateDebut": "2026-08-05T10:00:00",
            "dateFin": "2026-08-02T18:00:00",
            "montantTotal": 1800,
        },
        headers=auth_headers,
    )
    assert response.status_code == 400


async def test_client_commandes_counter(client, auth_headers, customer):
    response = await client.post(f"/api/clients/{customer.id_client}/commandes", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["totalCommandes"] == 1


async def test_configuration_endpoints(client, auth_headers):
    invalid = await client.post(
        "/api/configurations", json={"cle": "facturation", "data": "{oops"}, headers=auth_headers
    )
    assert invalid.status_code == 400

    created = await client.post(
        "/api/configurations", json={"cle": "facturation", "data": '{"tva": 20}'}, headers=auth_headers
    )
    assert created.status_code == 201

    by_key = await client.get("/api/configurations/cle/facturation", headers=auth_headers)
    assert by_key.json()["idConfiguration"] == created.json()["idConfiguration"]

    check = await client.post(
        "/api/configurations/validate-json", json={"json": "[1, 2"}, headers=auth_headers
    )
    assert check.status_code == 200
    assert check.json() == {"isValid": False, "message": "Le JSON est invalide"}


@pytest.mark.parametrize("text", ["NaN", '{"a": Infinity}', "[" * 100000])
async def test_non_standard_json_rejected_over_http(client, auth_headers, text):
    check = await client.post(
        "/api/configurations/validate-json", json={"json": text}, headers=auth_headers
    )
    assert check.status_code == 200
    assert check.json()["isValid"] is False

    created = await client.post(
        "/api/configurations", json={"cle": "limites", "data": text}, headers=auth_headers
    )
    assert created.status_code == 400


async def test_login_and_me(client, user, role):
    response = await client.post(
        "/api/auth/login", data={"username": "amina", "password": "motdepasse123"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["login"] == "amina"
    assert me.json()["role"]["idSociete"] == role.id_societe

    roles = await client.get("/api/roles", headers={"Authorization": f"Bearer {token}"})
    assert [r["nomRole"] for r in roles.json()] == ["ADMIN"]


async def test_login_with_wrong_password(client, user):
    response = await client.post(
        "/api/auth/login", data={"username": "amina", "password": "mauvais-mot"}
    )
    assert response.status_code == 401


async def test_role_delete_guard_over_http(client, auth_headers, user, role):
    response = await client.delete(f"/api/roles/{role.id_role}", headers=auth_headers)
    assert response.status_code == 409

    users = await client.get(f"/api/roles/{role.id_role}/utilisateurs", headers=auth_headers)
    assert [u["login"] for u in users.json()] == ["amina"]
