"""API tests for the guide application workflow."""

from bson import ObjectId

from .support import auth_headers


APPLICATION = {
    "name": "Tina Tourist",
    "email": "tourist@example.com",
    "title": "Hill tracts specialist",
    "reason": "Grew up in Bandarban",
    "cv_link": "https://example.com/cv.pdf",
}


async def _submit(async_client, **overrides):
    return await async_client.post("/api/v1/guideApplications/", json={**APPLICATION, **overrides})


class TestSubmit:
    async def test_creates_pending_application(self, async_client, db):
        response = await _submit(async_client)
        assert response.status_code == 201
        application_id = response.json()["application_id"]
        stored = await db.guideApplications.find_one({"_id": ObjectId(application_id)})
        assert stored["status"] == "pending"
        assert stored["applied_at"] is not None

    async def test_duplicate_pending_application_conflicts(self, async_client, db):
        assert (await _submit(async_client)).status_code == 201
        response = await _submit(async_client, title="Second try")
        assert response.status_code == 409
        assert await db.guideApplications.count_documents({"email": APPLICATION["email"]}) == 1

    async def test_other_applicant_is_not_blocked(self, async_client):
        assert (await _submit(async_client)).status_code == 201
        assert (await _submit(async_client, email="other@example.com")).status_code == 201

    async def test_missing_reason_is_validation_error(self, async_client):
        body = {k: v for k, v in APPLICATION.items() if k != "reason"}
        response = await async_client.post("/api/v1/guideApplications/", json=body)
        assert response.status_code == 400


class TestList:
    async def test_admin_only(self, async_client, admin, tourist):
        await _submit(async_client)
        assert (await async_client.get("/api/v1/guideApplications/")).status_code == 401
        forbidden = await async_client.get("/api/v1/guideApplications/", headers=auth_headers(tourist["email"]))
        assert forbidden.status_code == 403
        response = await async_client.get("/api/v1/guideApplications/", headers=auth_headers(admin["email"]))
        assert response.status_code == 200
        assert [a["email"] for a in response.json()] == [APPLICATION["email"]]


class TestAccept:
    async def test_promotes_user_and_consumes_application(self, async_client, db, admin, tourist):
        application_id = (await _submit(async_client)).json()["application_id"]
        response = await async_client.put(
            f"/api/v1/guideApplications/accept/{application_id}", headers=auth_headers(admin["email"])
        )
        assert response.status_code == 200
        assert (await db.users.find_one({"_id": tourist["_id"]}))["role"] == "tour-guide"
        assert await db.guideApplications.count_documents({}) == 0

    async def test_without_matching_user_changes_nothing(self, async_client, db, admin):
        application_id = (await _submit(async_client, email="stranger@example.com")).json()["application_id"]
        response = await async_client.put(
            f"/api/v1/guideApplications/accept/{application_id}", headers=auth_headers(admin["email"])
        )
        assert response.status_code == 409
        assert await db.guideApplications.count_documents({"_id": ObjectId(application_id)}) == 1
        assert await db.users.count_documents({"role": "tour-guide"}) == 0

    async def test_unknown_application(self, async_client, admin):
        response = await async_client.put(
            f"/api/v1/guideApplications/accept/{ObjectId()}", headers=auth_headers(admin["email"])
        )
        assert response.status_code == 404
        assert response.json() == {"message": "application not found"}

    async def test_malformed_id(self, async_client, admin):
        response = await async_client.put(
            "/api/v1/guideApplications/accept/xyz", headers=auth_headers(admin["email"])
        )
        assert response.status_code == 400

    async def test_requires_admin(self, async_client, db, tourist):
        application_id = (await _submit(async_client)).json()["application_id"]
        response = await async_client.put(
            f"/api/v1/guideApplications/accept/{application_id}", headers=auth_headers(tourist["email"])
        )
        assert response.status_code == 403
        assert (await db.users.find_one({"_id": tourist["_id"]}))["role"] == "tourist"

    async def test_can_reapply_after_acceptance_is_consumed(self, async_client, admin, tourist):
        application_id = (await _submit(async_client)).json()["application_id"]
        await async_client.put(
            f"/api/v1/guideApplications/accept/{application_id}", headers=auth_headers(admin["email"])
        )
        assert (await _submit(async_client)).status_code == 201


class TestReject:
    async def test_deletes_application_and_keeps_role(self, async_client, db, admin, tourist):
        application_id = (await _submit(async_client)).json()["application_id"]
        response = await async_client.delete(
            f"/api/v1/guideApplications/reject/{application_id}", headers=auth_headers(admin["email"])
        )
        assert response.status_code == 200
        assert await db.guideApplications.count_documents({}) == 0
        assert (await db.users.find_one({"_id": tourist["_id"]}))["role"] == "tourist"

    async def test_second_reject_is_not_found(self, async_client, admin):
        application_id = (await _submit(async_client)).json()["application_id"]
        headers = auth_headers(admin["email"])
        await async_client.delete(f"/api/v1/guideApplications/reject/{application_id}", headers=headers)
        response = await async_client.delete(f"/api/v1/guideApplications/reject/{application_id}", headers=headers)
        assert response.status_code == 404
