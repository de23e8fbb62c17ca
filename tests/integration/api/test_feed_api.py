"""Integration tests for the discovery feed."""

from httpx import AsyncClient

from tests.conftest import COMPLETE_CLINIC, COMPLETE_WORKER


class TestFeed:
    async def test_shows_only_opposite_role(self, api_client: AsyncClient, register):
        worker_headers, worker = await register(COMPLETE_WORKER)
        _, clinic = await register(COMPLETE_CLINIC)
        await register(COMPLETE_WORKER, name="Other Worker")

        response = await api_client.get("/api/v1/feed", headers=worker_headers)

        assert response.status_code == 200
        body = response.json()
        assert [card["id"] for card in body["profiles"]] == [clinic["id"]]
        assert body["has_more"] is False
        assert worker["id"] not in [card["id"] for card in body["profiles"]]

    async def test_incomplete_viewer_gets_empty_feed(self, api_client: AsyncClient, register):
        await register(COMPLETE_CLINIC)
        headers, _ = await register(role="worker", name="Dana")

        body = (await api_client.get("/api/v1/feed", headers=headers)).json()

        assert body == {"profiles": [], "has_more": False}

    async def test_incomplete_candidates_are_hidden(self, api_client: AsyncClient, register):
        headers, _ = await register(COMPLETE_CLINIC)
        await register(role="worker", name="Dana")

        body = (await api_client.get("/api/v1/feed", headers=headers)).json()

        assert body["profiles"] == []

    async def test_swiped_profiles_leave_the_feed(self, api_client: AsyncClient, register):
        headers, _ = await register(COMPLETE_WORKER)
        _, first = await register(COMPLETE_CLINIC)
        _, second = await register(COMPLETE_CLINIC, name="Bright Teeth")

        await api_client.post(
            "/api/v1/swipes",
            json={"to_profile_id": first["id"], "type": "PASS"},
            headers=headers,
        )
        body = (await api_client.get("/api/v1/feed", headers=headers)).json()

        assert [card["id"] for card in body["profiles"]] == [second["id"]]

    async def test_limit_and_has_more(self, api_client: AsyncClient, register):
        headers, _ = await register(COMPLETE_WORKER)
        await register(COMPLETE_CLINIC)
        await register(COMPLETE_CLINIC, name="Bright Teeth")

        body = (await api_client.get("/api/v1/feed?limit=1", headers=headers)).json()

        assert len(body["profiles"]) == 1
        assert body["has_more"] is True

    async def test_rejects_zero_limit(self, api_client: AsyncClient, register):
        headers, _ = await register(COMPLETE_WORKER)

        response = await api_client.get("/api/v1/feed?limit=0", headers=headers)

        assert response.status_code == 422

    async def test_requires_profile(self, api_client: AsyncClient, make_user, auth_headers_for):
        response = await api_client.get("/api/v1/feed", headers=auth_headers_for(make_user()))

        assert response.status_code == 401
        assert response.json()["error_code"] == "PROFILE_REQUIRED"
