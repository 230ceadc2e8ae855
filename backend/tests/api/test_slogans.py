import csv
import io
import json
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from app.models import Slogan, User
from app.services.ai.prompts import fallback_slogans
from tests.factories import SloganFactory

BRIEF = {
    "companyName": "Summit Roasters",
    "industry": "coffee",
    "brandPersonality": "friendly",
    "tone": "playful",
    "keywords": ["peak"],
    "count": 3,
}

SLOGANS_COMPLETION = json.dumps([
    "Brewed at the Peak",
    "Every Cup a Summit",
    "Climb Higher, Sip Better",
])


@pytest.mark.integration
class TestSloganGeneration:

    @pytest.mark.asyncio
    async def test_generate_slogans(
        self, async_client: AsyncClient, auth_headers: dict, db_session: Session, fake_completion
    ):
        fake_completion.text = SLOGANS_COMPLETION

        response = await async_client.post("/api/v1/slogans/generate", json=BRIEF, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["fallback"] is False
        assert [s["text"] for s in body["slogans"]] == json.loads(SLOGANS_COMPLETION)
        assert {s["generationBatchId"] for s in body["slogans"]} == {body["batchId"]}
        assert body["slogans"][0]["keywords"] == ["peak"]
        assert "Company Name: Summit Roasters" in fake_completion.prompts[0]
        assert "Keywords to include: peak" in fake_completion.prompts[0]
        assert db_session.query(Slogan).count() == 3

    @pytest.mark.asyncio
    async def test_numbered_lines_are_accepted(
        self, async_client: AsyncClient, auth_headers: dict, fake_completion
    ):
        fake_completion.text = "Here are your slogans:\n1. Brewed at the Peak\n2. \"Every Cup a Summit\"\n3. Sip Higher"

        response = await async_client.post("/api/v1/slogans/generate", json=BRIEF, headers=auth_headers)

        assert [s["text"] for s in response.json()["slogans"]] == [
            "Brewed at the Peak", "Every Cup a Summit", "Sip Higher",
        ]

    @pytest.mark.asyncio
    async def test_completion_failure_uses_fallback(
        self, async_client: AsyncClient, auth_headers: dict, db_session: Session, fake_completion
    ):
        fake_completion.error = True

        response = await async_client.post(
            "/api/v1/slogans/generate", json={**BRIEF, "count": 5}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["fallback"] is True
        assert [s["text"] for s in body["slogans"]] == fallback_slogans("Summit Roasters", 5)
        assert db_session.query(Slogan).count() == 5

    @pytest.mark.asyncio
    async def test_too_few_slogans_uses_fallback(
        self, async_client: AsyncClient, auth_headers: dict, fake_completion
    ):
        fake_completion.text = '["Only one idea"]'

        response = await async_client.post("/api/v1/slogans/generate", json=BRIEF, headers=auth_headers)

        body = response.json()
        assert body["fallback"] is True
        assert [s["text"] for s in body["slogans"]] == fallback_slogans("Summit Roasters", 3)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("changes, error", [
        ({"companyName": "  "}, "Company name is required and must be at most 100 characters"),
        ({"industry": None}, "Industry is required and must be at most 50 characters"),
        ({"brandPersonality": "grumpy"}, "Brand personality must be one of: friendly, professional, witty, premium, innovative"),
        ({"tone": "sarcastic"}, "Tone must be one of: casual, formal, playful, serious, inspiring"),
        ({"keywords": ["a", "b", "c", "d", "e", "f"]}, "At most 5 keywords of up to 30 characters each"),
        ({"count": 11}, "Count must be between 1 and 10"),
    ])
    async def test_generate_validation(
        self, async_client: AsyncClient, auth_headers: dict, fake_completion, changes, error
    ):
        response = await async_client.post(
            "/api/v1/slogans/generate", json={**BRIEF, **changes}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": error}
        assert fake_completion.prompts == []

    @pytest.mark.asyncio
    async def test_requires_auth(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/slogans/generate", json=BRIEF)

        assert response.status_code == 401


@pytest.mark.integration
class TestSloganHistory:

    @pytest.mark.asyncio
    async def test_history_newest_first_and_scoped(
        self, async_client: AsyncClient, auth_headers: dict, sample_user: User, other_user: User, save
    ):
        now = datetime.now(timezone.utc)
        older, newer, _ = save(
            SloganFactory.build(user_id=sample_user.id, created_at=now - timedelta(days=1)),
            SloganFactory.build(user_id=sample_user.id, created_at=now),
            SloganFactory.build(user_id=other_user.id),
        )

        response = await async_client.get("/api/v1/slogans/history", headers=auth_headers)
        first_page = await async_client.get(
            "/api/v1/slogans/history", params={"limit": 1}, headers=auth_headers
        )

        assert [s["id"] for s in response.json()["slogans"]] == [newer.id, older.id]
        assert response.json()["pagination"] == {"limit": 20, "offset": 0, "hasMore": False}
        assert [s["id"] for s in first_page.json()["slogans"]] == [newer.id]
        assert first_page.json()["pagination"]["hasMore"] is True


@pytest.mark.integration
class TestSloganFavorites:

    @pytest.mark.asyncio
    async def test_add_list_and_remove_favorite(
        self, async_client: AsyncClient, auth_headers: dict, sample_user: User, save
    ):
        liked, ignored = save(
            SloganFactory.build(user_id=sample_user.id),
            SloganFactory.build(user_id=sample_user.id),
        )

        added = await async_client.post(f"/api/v1/slogans/favorites/{liked.id}", headers=auth_headers)
        favorites = await async_client.get("/api/v1/slogans/favorites", headers=auth_headers)

        assert added.status_code == 201
        assert added.json()["slogan"]["isFavorite"] is True
        assert added.json()["slogan"]["favoritedAt"] is not None
        assert [s["id"] for s in favorites.json()["favorites"]] == [liked.id]

        removed = await async_client.delete(f"/api/v1/slogans/favorites/{liked.id}", headers=auth_headers)
        favorites = await async_client.get("/api/v1/slogans/favorites", headers=auth_headers)

        assert removed.json() == {"success": True, "message": "Removed from favorites"}
        assert favorites.json()["favorites"] == []

    @pytest.mark.asyncio
    async def test_foreign_slogan_is_not_found(
        self, async_client: AsyncClient, other_auth_headers: dict, sample_user: User, save
    ):
        slogan = save(SloganFactory.build(user_id=sample_user.id))

        response = await async_client.post(f"/api/v1/slogans/favorites/{slogan.id}", headers=other_auth_headers)

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Slogan not found"}


@pytest.mark.integration
class TestSloganExport:

    @pytest.mark.asyncio
    async def test_export_csv(self, async_client: AsyncClient, auth_headers: dict, sample_user: User, save):
        slogan = save(SloganFactory.build(
            user_id=sample_user.id, text="Brewed at the Peak", keywords=["peak", "brew"],
        ))

        response = await async_client.post(
            "/api/v1/slogans/export", json={"sloganIds": [slogan.id], "format": "csv"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == 'attachment; filename="slogans.csv"'
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == ["Slogan", "Company", "Industry", "Brand Personality", "Keywords", "Created Date"]
        assert rows[1][:5] == ["Brewed at the Peak", "Summit Roasters", "coffee", "friendly", "peak, brew"]

    @pytest.mark.asyncio
    async def test_export_txt(self, async_client: AsyncClient, auth_headers: dict, sample_user: User, save):
        slogan = save(SloganFactory.build(user_id=sample_user.id, text="Every Cup a Summit"))

        response = await async_client.post(
            "/api/v1/slogans/export", json={"sloganIds": [slogan.id], "format": "TXT"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.text.startswith("Marketing Slogans\n")
        assert "1. Every Cup a Summit\n   Company: Summit Roasters\n   Industry: coffee" in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload, status_code, error", [
        ({"sloganIds": ["x"], "format": "docx"}, 400, "Format must be one of: csv, txt"),
        ({"sloganIds": [], "format": "csv"}, 400, "Slogan IDs array is required"),
        ({"sloganIds": ["missing"], "format": "csv"}, 404, "No slogans found"),
    ])
    async def test_export_errors(
        self, async_client: AsyncClient, auth_headers: dict, payload, status_code, error
    ):
        response = await async_client.post("/api/v1/slogans/export", json=payload, headers=auth_headers)

        assert response.status_code == status_code
        assert response.json() == {"success": False, "error": error}
