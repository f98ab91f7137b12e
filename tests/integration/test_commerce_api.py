"""Integration tests for the per-user commerce endpoints."""
import pytest

MISSING_ID = "f" * 24


def _payment_body(user, account="4111", provider="Visa"):
    return {"user_id": user["id"], "account_number": account, "payment_type": "Pix", "provider": provider}


@pytest.fixture
def album(repository, alice):
    label = repository.create("labels", {"name": "Odeon"})
    artist = repository.create("artists", {"name": "Cartola", "label_id": label["id"]})
    record = repository.create("records", {
        "artist_id": artist["id"], "name": "Cartola", "release_year": 1974,
        "duration": "35:02", "language": "pt", "number_of_tracks": 12,
    })
    return repository.create("albums", {
        "user_id": alice["id"], "record_id": record["id"], "description": "Mint condition copy",
        "stock": 1, "new": False, "price": 300.0, "format": "vinyl",
    })


class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get("/api/v1/user-payments")
        assert response.status_code == 401
        assert response.json() == {"code": 401, "message": "Please authenticate"}

    def test_invalid_token(self, client):
        response = client.get("/api/v1/user-payments", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401

    def test_token_for_deleted_user(self, client, repository, alice, auth_header):
        headers = auth_header(alice)
        repository.delete("users", alice["id"])
        assert client.get("/api/v1/albums", headers=headers).status_code == 401


class TestUserPayments:

    def test_create_own_payment(self, client, alice, auth_header):
        response = client.post("/api/v1/user-payments", json=_payment_body(alice), headers=auth_header(alice))
        assert response.status_code == 201
        body = response.json()
        assert body["user_id"] == alice["id"]
        assert body["payment_type"] == "Pix"
        assert len(body["id"]) == 24

    def test_create_for_other_user_denied(self, client, alice, bob, auth_header):
        response = client.post("/api/v1/user-payments", json=_payment_body(bob), headers=auth_header(alice))
        assert response.status_code == 401
        assert bob["id"] not in response.json()["message"]

    def test_invalid_body(self, client, alice, auth_header):
        body = _payment_body(alice)
        body["payment_type"] = "Bitcoin"
        response = client.post("/api/v1/user-payments", json=body, headers=auth_header(alice))
        assert response.status_code == 400
        assert response.json()["code"] == 400

    def test_unknown_body_field_rejected(self, client, alice, auth_header):
        body = dict(_payment_body(alice), role="admin")
        response = client.post("/api/v1/user-payments", json=body, headers=auth_header(alice))
        assert response.status_code == 400

    def test_uppercase_owner_id_rejected(self, client, alice, auth_header):
        body = dict(_payment_body(alice), user_id=alice["id"].upper())
        response = client.post("/api/v1/user-payments", json=body, headers=auth_header(alice))
        assert response.status_code == 400

    def test_uppercase_path_id_rejected(self, client, repository, alice, auth_header):
        payment = repository.create("user_payments", _payment_body(alice))
        response = client.get(f"/api/v1/user-payments/{payment['id'].upper()}", headers=auth_header(alice))
        assert response.status_code == 400
        assert response.json()["code"] == 400

    def test_duplicate_is_conflict(self, client, alice, auth_header):
        headers = auth_header(alice)
        assert client.post("/api/v1/user-payments", json=_payment_body(alice), headers=headers).status_code == 201
        response = client.post("/api/v1/user-payments", json=_payment_body(alice), headers=headers)
        assert response.status_code == 409
        assert response.json()["code"] == 409

    def test_list_requires_owner_filter(self, client, alice, auth_header):
        response = client.get("/api/v1/user-payments", headers=auth_header(alice))
        assert response.status_code == 401

    def test_list_own(self, client, alice, bob, repository, auth_header):
        repository.create("user_payments", _payment_body(alice, account="1"))
        repository.create("user_payments", _payment_body(alice, account="2"))
        repository.create("user_payments", _payment_body(bob, account="3"))

        response = client.get(
            "/api/v1/user-payments",
            params={"user_id": alice["id"], "limit": 1, "page": 2, "ignored": "x"},
            headers=auth_header(alice),
        )
        assert response.status_code == 200
        body = response.json()
        assert [p["account_number"] for p in body["results"]] == ["2"]
        assert body["page"] == 2
        assert body["limit"] == 1
        assert body["total_pages"] == 2
        assert body["total_results"] == 2

    def test_negative_limit(self, client, alice, auth_header):
        response = client.get(
            "/api/v1/user-payments", params={"user_id": alice["id"], "limit": -1}, headers=auth_header(alice)
        )
        assert response.status_code == 400

    def test_get_update_delete(self, client, alice, bob, repository, auth_header):
        payment = repository.create("user_payments", _payment_body(alice))
        url = f"/api/v1/user-payments/{payment['id']}"

        assert client.get(url, headers=auth_header(bob)).status_code == 401
        assert client.get(url, headers=auth_header(alice)).json()["id"] == payment["id"]

        response = client.patch(url, json={"provider": "Elo"}, headers=auth_header(alice))
        assert response.status_code == 200
        assert response.json()["provider"] == "Elo"

        assert client.patch(url, json={}, headers=auth_header(alice)).status_code == 400

        assert client.delete(url, headers=auth_header(alice)).status_code == 204
        assert client.get(url, headers=auth_header(alice)).status_code == 404

    def test_malformed_id_is_validation_error(self, client, alice, auth_header):
        response = client.get("/api/v1/user-payments/not-an-id", headers=auth_header(alice))
        assert response.status_code == 400

    def test_missing_id_is_not_found(self, client, alice, auth_header):
        response = client.get(f"/api/v1/user-payments/{MISSING_ID}", headers=auth_header(alice))
        assert response.status_code == 404
        assert response.json() == {"code": 404, "message": "User payment not found"}


class TestCartItems:

    def test_cart_flow(self, client, repository, alice, bob, album, auth_header):
        session = repository.create("shopping_sessions", {"user_id": bob["id"], "total": 0.0})
        body = {"shopping_session_id": session["id"], "album_id": album["id"], "quantity": 1}

        assert client.post("/api/v1/cart-items", json=body, headers=auth_header(alice)).status_code == 401

        response = client.post("/api/v1/cart-items", json=body, headers=auth_header(bob))
        assert response.status_code == 201

        listing = client.get(
            "/api/v1/cart-items", params={"shopping_session_id": session["id"]}, headers=auth_header(bob)
        )
        assert listing.json()["total_results"] == 1

        denied = client.get(
            "/api/v1/cart-items", params={"shopping_session_id": session["id"]}, headers=auth_header(alice)
        )
        assert denied.status_code == 401

    def test_quantity_must_be_positive(self, client, repository, bob, album, auth_header):
        session = repository.create("shopping_sessions", {"user_id": bob["id"], "total": 0.0})
        body = {"shopping_session_id": session["id"], "album_id": album["id"], "quantity": 0}
        assert client.post("/api/v1/cart-items", json=body, headers=auth_header(bob)).status_code == 400


class TestAlbums:

    def test_any_user_can_browse(self, client, bob, album, auth_header):
        listing = client.get("/api/v1/albums", params={"new": "false"}, headers=auth_header(bob))
        assert listing.status_code == 200
        assert [a["id"] for a in listing.json()["results"]] == [album["id"]]

        assert client.get(f"/api/v1/albums/{album['id']}", headers=auth_header(bob)).status_code == 200

    def test_only_seller_can_change(self, client, alice, bob, album, auth_header):
        url = f"/api/v1/albums/{album['id']}"
        assert client.patch(url, json={"stock": 5}, headers=auth_header(bob)).status_code == 401
        response = client.patch(url, json={"stock": 5}, headers=auth_header(alice))
        assert response.json()["stock"] == 5
