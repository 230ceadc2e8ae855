import json

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from app.models import SocialPost, User
from tests.factories import SocialPostFactory

POSTS_COMPLETION = json.dumps([
    {"content": "Fresh roast Friday is here. Grab a bag before noon!", "hashtags": ["#coffee", "roastday"]},
    {"content": "Your desk deserves better beans.", "hashtags": ["remotework"]},
])


@pytest.mark.integration
class TestSocialPostGeneration:

    @pytest.mark.asyncio
    async def test_generate_posts_for_each_platform(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        db_session: Session,
        fake_completion,
    ):
        fake_completion.text = POSTS_COMPLETION

        response = await async_client.post(
            "/api/v1/social-posts/generate",
            json={"topic": "weekly roast drop", "platforms": ["instagram", "facebook"], "count": 2},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["generatedCount"] == 4
        assert body["platforms"] == ["instagram", "facebook"]
        assert len(fake_completion.prompts) == 2

        instagram = [p for p in body["posts"] if p["platform"] == "instagram"]
        facebook = [p for p in body["posts"] if p["platform"] == "facebook"]
        assert instagram[0]["hashtags"] == ["coffee", "roastday"]
        # Facebook does not support hashtags
        assert all(p["hashtags"] == [] for p in facebook)
        assert all(p["isDraft"] is True for p in body["posts"])
        assert instagram[0]["characterCount"] == len(instagram[0]["content"])
        assert db_session.query(SocialPost).count() == 4

    @pytest.mark.asyncio
    async def test_generate_posts_uses_brand_tone(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        sample_brand_profile,
        fake_completion,
    ):
        fake_completion.text = POSTS_COMPLETION

        response = await async_client.post(
            "/api/v1/social-posts/generate",
            json={
                "topic": "weekly roast drop",
                "platforms": ["linkedin"],
                "brandProfileId": sample_brand_profile.id,
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert "friendly" in fake_completion.prompts[0]
        assert all(p["brandProfileId"] == sample_brand_profile.id for p in response.json()["posts"])

    @pytest.mark.asyncio
    async def test_generate_posts_all_platforms_fail(
        self, async_client: AsyncClient, auth_headers: dict, fake_completion
    ):
        fake_completion.error = True

        response = await async_client.post(
            "/api/v1/social-posts/generate",
            json={"topic": "weekly roast drop", "platforms": ["twitter"]},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to generate any posts"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload, error", [
        ({"topic": "ab"}, "Post topic is required and must be at least 3 characters"),
        ({"topic": "roast", "platforms": []}, "At least one platform must be specified"),
        ({"topic": "roast", "platforms": ["myspace"]}, "Invalid platforms: myspace"),
        ({"topic": "roast", "count": 11}, "Count must be between 1 and 10"),
    ])
    async def test_generate_posts_validation(
        self, async_client: AsyncClient, auth_headers: dict, payload, error
    ):
        response = await async_client.post(
            "/api/v1/social-posts/generate", json=payload, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == error


@pytest.mark.integration
class TestSocialPostDrafts:

    @pytest.mark.asyncio
    async def test_list_drafts_only(
        self, async_client: AsyncClient, auth_headers: dict, sample_user: User, save
    ):
        save(
            SocialPostFactory.build(user_id=sample_user.id),
            SocialPostFactory.build(user_id=sample_user.id, is_draft=False),
        )

        response = await async_client.get(
            "/api/v1/social-posts/posts", params={"isDraft": True}, headers=auth_headers
        )

        assert response.status_code == 200
        posts = response.json()["posts"]
        assert len(posts) == 1
        assert posts[0]["isDraft"] is True

    @pytest.mark.asyncio
    async def test_update_recomputes_character_count(
        self, async_client: AsyncClient, auth_headers: dict, sample_user: User, save
    ):
        post = save(SocialPostFactory.build(user_id=sample_user.id))

        response = await async_client.patch(
            f"/api/v1/social-posts/posts/{post.id}",
            json={"content": "Short and sweet", "hashtags": ["espresso"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        updated = response.json()["post"]
        assert updated["content"] == "Short and sweet"
        assert updated["characterCount"] == len("Short and sweet")
        assert updated["hashtags"] == ["espresso"]

    @pytest.mark.asyncio
    async def test_schedule_and_publish(
        self, async_client: AsyncClient, auth_headers: dict, sample_user: User, save
    ):
        post = save(SocialPostFactory.build(user_id=sample_user.id))

        missing = await async_client.patch(
            f"/api/v1/social-posts/posts/{post.id}/schedule", json={}, headers=auth_headers
        )
        scheduled = await async_client.patch(
            f"/api/v1/social-posts/posts/{post.id}/schedule",
            json={"scheduledFor": "2030-01-01T09:00:00Z"},
            headers=auth_headers,
        )
        published = await async_client.patch(
            f"/api/v1/social-posts/posts/{post.id}/publish", headers=auth_headers
        )

        assert missing.status_code == 400
        assert scheduled.status_code == 200
        assert scheduled.json()["post"]["isDraft"] is False
        assert scheduled.json()["post"]["scheduledFor"].startswith("2030-01-01T09:00:00")
        assert published.status_code == 200
        assert published.json()["post"]["postedAt"] is not None

    @pytest.mark.asyncio
    async def test_delete_foreign_post_is_not_found(
        self, async_client: AsyncClient, other_auth_headers: dict, sample_user: User, save
    ):
        post = save(SocialPostFactory.build(user_id=sample_user.id))

        response = await async_client.delete(
            f"/api/v1/social-posts/posts/{post.id}", headers=other_auth_headers
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Post not found"

    @pytest.mark.asyncio
    async def test_platforms(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/social-posts/platforms")

        assert response.status_code == 200
        platforms = response.json()["platforms"]
        assert platforms["twitter"]["maxChars"] == 280
        assert platforms["facebook"]["supportsHashtags"] is False
