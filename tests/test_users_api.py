"""API tests for the user endpoints."""

from bson import ObjectId

from .support import auth_headers, insert_user


class TestRegister:
    async def test_creates_tourist(self, async_client, db):
        response = await async_client.post(
            "/api/v1/users/", json={"name": "Rahim", "email": "rahim@example.com", "photo": "p.jpg"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "tourist"
        assert body["email"] == "rahim@example.com"
        assert ObjectId.is_valid(body["id"])
        assert body["created_at"] is not None

    async def test_second_registration_conflicts_and_keeps_role(self, async_client, db, guide):
        response = await async_client.post(
            "/api/v1/users/", json={"name": "Someone Else", "email": guide["email"]}
        )
        assert response.status_code == 409
        assert response.json() == {"message": "user already exists"}
        stored = await db.users.find_one({"email": guide["email"]})
        assert stored["role"] == "tour-guide"
        assert stored["name"] == "Gary Guide"
        assert await db.users.count_documents({"email": guide["email"]}) == 1

    async def test_role_in_body_is_ignored(self, async_client, db):
        response = await async_client.post(
            "/api/v1/users/", json={"name": "Sneaky", "email": "sneaky@example.com", "role": "admin"}
        )
        assert response.status_code == 201
        assert response.json()["role"] == "tourist"

    async def test_missing_email_is_validation_error(self, async_client):
        response = await async_client.post("/api/v1/users/", json={"name": "No Mail"})
        assert response.status_code == 400


class TestFindUsers:
    async def test_filters_and_always_returns_page(self, async_client, db, admin, tourist, guide):
        headers = auth_headers(admin["email"])

        everyone = (await async_client.get("/api/v1/users/", headers=headers)).json()
        assert everyone["total"] == 3
        assert len(everyone["items"]) == 3

        by_name = (await async_client.get("/api/v1/users/", params={"name": "tina"}, headers=headers)).json()
        assert by_name["total"] == 1
        assert isinstance(by_name["items"], list)
        assert by_name["items"][0]["email"] == tourist["email"]

        by_email = (await async_client.get("/api/v1/users/", params={"email": "GUIDE@"}, headers=headers)).json()
        assert [u["email"] for u in by_email["items"]] == [guide["email"]]

        by_role = (await async_client.get("/api/v1/users/", params={"role": "admin"}, headers=headers)).json()
        assert [u["email"] for u in by_role["items"]] == [admin["email"]]

    async def test_filter_input_is_not_a_pattern(self, async_client, admin):
        response = await async_client.get(
            "/api/v1/users/", params={"name": ".*"}, headers=auth_headers(admin["email"])
        )
        assert response.json() == {"items": [], "total": 0}

    async def test_unknown_role_is_rejected(self, async_client, admin):
        response = await async_client.get(
            "/api/v1/users/", params={"role": "pilot"}, headers=auth_headers(admin["email"])
        )
        assert response.status_code == 400


class TestAdminStatus:
    async def test_self_query(self, async_client, admin, tourist):
        response = await async_client.get(
            f"/api/v1/users/admin/{admin['email']}", headers=auth_headers(admin["email"])
        )
        assert response.json() == {"admin": True}
        response = await async_client.get(
            f"/api/v1/users/admin/{tourist['email']}", headers=auth_headers(tourist["email"])
        )
        assert response.json() == {"admin": False}

    async def test_cannot_query_someone_else(self, async_client, admin, tourist):
        response = await async_client.get(
            f"/api/v1/users/admin/{admin['email']}", headers=auth_headers(tourist["email"])
        )
        assert response.status_code == 403

    async def test_role_lookup(self, async_client, guide):
        response = await async_client.get(
            f"/api/v1/users/role/{guide['email']}", headers=auth_headers(guide["email"])
        )
        assert response.json() == {"role": "tour-guide"}

    async def test_role_lookup_unknown_user(self, async_client):
        response = await async_client.get(
            "/api/v1/users/role/nobody@example.com", headers=auth_headers("nobody@example.com")
        )
        assert response.status_code == 404


class TestPromote:
    async def test_admin_promotes(self, async_client, db, admin, tourist):
        response = await async_client.patch(
            f"/api/v1/users/admin/{tourist['_id']}", headers=auth_headers(admin["email"])
        )
        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        assert (await db.users.find_one({"_id": tourist["_id"]}))["role"] == "admin"

    async def test_non_admin_is_forbidden(self, async_client, db, tourist, guide):
        response = await async_client.patch(
            f"/api/v1/users/admin/{guide['_id']}", headers=auth_headers(tourist["email"])
        )
        assert response.status_code == 403
        assert (await db.users.find_one({"_id": guide["_id"]}))["role"] == "tour-guide"

    async def test_unknown_id(self, async_client, admin):
        response = await async_client.patch(
            f"/api/v1/users/admin/{ObjectId()}", headers=auth_headers(admin["email"])
        )
        assert response.status_code == 404


class TestProfile:
    async def test_patches_only_given_fields(self, async_client, db, tourist):
        response = await async_client.patch(
            f"/api/v1/users/{tourist['_id']}",
            json={"phone": "+8801700000000"},
            headers=auth_headers(tourist["email"]),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["phone"] == "+8801700000000"
        assert body["name"] == "Tina Tourist"
        stored = await db.users.find_one({"_id": tourist["_id"]})
        assert stored["phone"] == "+8801700000000"
        assert "address" not in stored

    async def test_empty_patch_still_stamps_updated_at(self, async_client, db):
        user = await insert_user(db, "stamp@example.com")
        await db.users.update_one({"_id": user["_id"]}, {"$unset": {"updated_at": ""}})
        response = await async_client.patch(
            f"/api/v1/users/{user['_id']}", json={}, headers=auth_headers("stamp@example.com")
        )
        assert response.status_code == 200
        assert response.json()["updated_at"] is not None

    async def test_null_name_is_rejected_and_record_untouched(self, async_client, db, admin, tourist):
        response = await async_client.patch(
            f"/api/v1/users/{tourist['_id']}", json={"name": None}, headers=auth_headers(tourist["email"])
        )
        assert response.status_code == 400
        assert response.json()["message"] == "validation error"
        assert (await db.users.find_one({"_id": tourist["_id"]}))["name"] == "Tina Tourist"

        search = await async_client.get("/api/v1/users/", headers=auth_headers(admin["email"]))
        assert search.status_code == 200
        assert search.json()["total"] == 2

    async def test_null_optional_fields_are_accepted(self, async_client, tourist):
        response = await async_client.patch(
            f"/api/v1/users/{tourist['_id']}", json={"photo": None}, headers=auth_headers(tourist["email"])
        )
        assert response.status_code == 200
        assert response.json()["photo"] is None

    async def test_other_user_is_forbidden(self, async_client, tourist, guide):
        response = await async_client.patch(
            f"/api/v1/users/{tourist['_id']}", json={"name": "X"}, headers=auth_headers(guide["email"])
        )
        assert response.status_code == 403

    async def test_admin_may_edit_anyone(self, async_client, admin, tourist):
        response = await async_client.patch(
            f"/api/v1/users/{tourist['_id']}", json={"address": "Dhaka"}, headers=auth_headers(admin["email"])
        )
        assert response.status_code == 200
        assert response.json()["address"] == "Dhaka"

    async def test_unknown_user(self, async_client, admin):
        response = await async_client.patch(
            f"/api/v1/users/{ObjectId()}", json={"name": "X"}, headers=auth_headers(admin["email"])
        )
        assert response.status_code == 404


class TestGuideLookup:
    async def test_returns_guide(self, async_client, guide):
        response = await async_client.get(f"/api/v1/users/{guide['_id']}")
        assert response.status_code == 200
        assert response.json()["email"] == guide["email"]

    async def test_non_guide_is_not_found(self, async_client, tourist):
        response = await async_client.get(f"/api/v1/users/{tourist['_id']}")
        assert response.status_code == 404
        assert response.json() == {"message": "guide not found"}

    async def test_malformed_id_is_distinct_from_not_found(self, async_client):
        response = await async_client.get("/api/v1/users/not-an-id")
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid ID format"}
