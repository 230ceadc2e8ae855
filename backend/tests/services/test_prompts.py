import pytest

from app.services.ai.prompts import (
    PromptRegistry,
    PromptTemplate,
    build_logo_prompts_request,
    build_name_generation_prompt,
    build_social_post_prompt,
)

BRAND = {
    "name": "Summit Roasters",
    "tagline": "Coffee from the top",
    "industry": "coffee",
    "tone_of_voice": "friendly",
    "target_audience": "remote workers",
    "brand_personality": ["Warm", "Playful"],
}


@pytest.mark.unit
class TestPromptRegistry:

    def test_default_templates(self):
        registry = PromptRegistry()

        assert set(registry.list_templates()) == {
            "logo_prompt_synthesis", "business_name_generation", "social_post_generation", "slogan_generation",
        }

    def test_latest_version_wins(self):
        registry = PromptRegistry()
        registry.register_template(PromptTemplate(
            name="logo_prompt_synthesis",
            template="v2 {concept}",
            version="1.10",
            description="newer",
            variables=["concept"],
        ))

        assert registry.get_template("logo_prompt_synthesis").version == "1.10"
        assert registry.get_template("logo_prompt_synthesis", version="1.0").version == "1.0"
        assert registry.get_template("missing") is None

    def test_missing_variables(self):
        template = PromptRegistry().get_template("business_name_generation")

        with pytest.raises(ValueError):
            template.format(count=3)


@pytest.mark.unit
class TestPromptBuilders:

    def test_logo_request(self):
        prompt = build_logo_prompts_request("coffee", "vintage", ["#3b2f2f"], True, BRAND, count=3)

        assert "Generate 3 optimized logo prompts" in prompt
        assert "Colors: #3b2f2f" in prompt
        assert "Include text: yes" in prompt
        assert "- Name: Summit Roasters" in prompt

    def test_logo_request_without_brand_or_colors(self):
        prompt = build_logo_prompts_request("coffee", "modern", [], False)

        assert "Colors: brand appropriate" in prompt
        assert "Brand context" not in prompt

    def test_name_prompt_keywords(self):
        prompt = build_name_generation_prompt("coffee", "modern", ["peak", "brew"], BRAND, 5)

        assert "Generate 5 creative and memorable business names for a coffee business" in prompt
        assert "Keywords to consider: peak, brew" in prompt
        assert "- Current brand: Summit Roasters" in prompt
        # Literal JSON braces survive formatting
        assert '"name": "Business Name"' in prompt

    def test_social_prompt_hashtag_rule(self):
        instagram = build_social_post_prompt("instagram", "educational", "brewing tips", "friendly", BRAND, True, 2)
        facebook = build_social_post_prompt("facebook", "educational", "brewing tips", "friendly", None, True, 2)

        assert "INSTAGRAM" in instagram
        assert "Include relevant hashtags (max 30)" in instagram
        assert "Brand personality: Warm, Playful" in instagram
        assert "No hashtags needed" in facebook
