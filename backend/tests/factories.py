import factory
from faker import Faker
from datetime import datetime, timezone
import uuid

from app.models import (
    User, BrandProfile, BackgroundJob, BrandAsset, BrandName, SocialPost,
    ContentPost, PostMetric, SocialAccount, Slogan,
)

fake = Faker()


def _uuid():
    return str(uuid.uuid4())


def _now():
    return datetime.now(timezone.utc)


class UserFactory(factory.Factory):
    """Factory for creating User instances."""

    class Meta:
        model = User

    id = factory.LazyFunction(_uuid)
    email = factory.LazyAttribute(lambda obj: fake.unique.email())
    full_name = factory.LazyAttribute(lambda obj: fake.name())
    is_active = True
    created_at = factory.LazyFunction(_now)


class BrandProfileFactory(factory.Factory):
    """Factory for creating BrandProfile instances."""

    class Meta:
        model = BrandProfile

    id = factory.LazyFunction(_uuid)
    user_id = None
    name = factory.LazyAttribute(lambda obj: fake.company())
    tagline = factory.LazyAttribute(lambda obj: fake.catch_phrase())
    mission = factory.LazyAttribute(lambda obj: fake.text(max_nb_chars=160))
    industry = "coffee"
    tone_of_voice = "friendly"
    target_audience = "Remote workers who care about good coffee"
    brand_personality = factory.LazyFunction(lambda: ["Warm", "Playful"])
    created_at = factory.LazyFunction(_now)


class BackgroundJobFactory(factory.Factory):
    """Factory for creating BackgroundJob instances."""

    class Meta:
        model = BackgroundJob

    id = factory.LazyFunction(_uuid)
    user_id = None
    job_type = "logo_generation"
    status = "pending"
    input_data = factory.LazyFunction(lambda: {
        "brandProfileId": None,
        "style": "modern",
        "concept": "mountain coffee roaster",
        "colors": ["#3b2f2f"],
        "includeText": False,
        "iterations": 4,
        "brandContext": None,
    })
    output_data = factory.LazyFunction(lambda: {"progress": 0})
    created_at = factory.LazyFunction(_now)


class BrandAssetFactory(factory.Factory):
    """Factory for creating BrandAsset instances."""

    class Meta:
        model = BrandAsset

    id = factory.LazyFunction(_uuid)
    user_id = None
    brand_profile_id = None
    asset_type = "logo"
    file_name = factory.Sequence(lambda n: f"logo-1700000000000-{n}.png")
    file_path = factory.LazyAttribute(lambda obj: f"{obj.user_id}/{obj.file_name}")
    file_url = factory.LazyAttribute(lambda obj: f"https://storage.test/brand-assets/{obj.file_path}")
    file_size = 2048
    mime_type = "image/png"
    width = 1024
    height = 1024
    is_primary = False
    ai_prompt = "Modern minimal logo design"
    ai_model = "stability-diffusion-xl"
    generation_params = factory.LazyFunction(lambda: {"seed": 42, "iteration": 0})
    created_at = factory.LazyFunction(_now)


class BrandNameFactory(factory.Factory):
    """Factory for creating BrandName instances."""

    class Meta:
        model = BrandName

    id = factory.LazyFunction(_uuid)
    user_id = None
    brand_profile_id = None
    name = factory.LazyAttribute(lambda obj: fake.unique.company())
    niche = "coffee"
    style = "modern"
    reasoning = "AI generated name"
    domain_available = None
    available_extensions = factory.LazyFunction(list)
    is_favorite = False
    is_claimed = False
    generation_batch_id = factory.LazyFunction(_uuid)
    created_at = factory.LazyFunction(_now)



class SloganFactory(factory.Factory):
    class Meta:
        model = Slogan

    id = factory.LazyFunction(_uuid)
    user_id = None
    brand_profile_id = None
    text = factory.LazyAttribute(lambda obj: fake.catch_phrase())
    company_name = "Summit Roasters"
    industry = "coffee"
    brand_personality = "friendly"
    tone = "casual"
    keywords = factory.LazyFunction(list)
    is_favorite = False
    favorited_at = None
    generation_batch_id = factory.LazyFunction(_uuid)
    created_at = factory.LazyFunction(_now)

class SocialPostFactory(factory.Factory):
    """Factory for creating SocialPost instances."""

    class Meta:
        model = SocialPost

    id = factory.LazyFunction(_uuid)
    user_id = None
    brand_profile_id = None
    platform = "instagram"
    post_type = "promotional"
    content = factory.LazyAttribute(lambda obj: fake.sentence(nb_words=12))
    hashtags = factory.LazyFunction(lambda: ["coffee", "morning"])
    character_count = factory.LazyAttribute(lambda obj: len(obj.content))
    is_draft = True
    created_at = factory.LazyFunction(_now)


class ContentPostFactory(factory.Factory):
    """Factory for creating ContentPost instances."""

    class Meta:
        model = ContentPost

    id = factory.LazyFunction(_uuid)
    user_id = None
    platform = "tiktok"
    content = factory.LazyAttribute(lambda obj: fake.sentence(nb_words=10))
    post_url = factory.LazyAttribute(lambda obj: fake.url())
    created_at = factory.LazyFunction(_now)


class PostMetricFactory(factory.Factory):
    """Factory for creating PostMetric instances."""

    class Meta:
        model = PostMetric

    post_id = None
    views = 1000
    likes = 50
    shares = 10
    comments = 5
    recorded_at = factory.LazyFunction(_now)


class SocialAccountFactory(factory.Factory):
    """Factory for creating SocialAccount instances."""

    class Meta:
        model = SocialAccount

    user_id = None
    platform = "tiktok"
    username = factory.LazyAttribute(lambda obj: fake.user_name())
    display_name = factory.LazyAttribute(lambda obj: fake.name())
    is_active = True
    connected_at = factory.LazyFunction(_now)
