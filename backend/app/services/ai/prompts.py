"""
AI Prompt Templates

Versioned prompt templates for the generators plus the helpers that render
brand context into them. Templates use ``str.format`` placeholders, so
literal JSON braces are doubled.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class PromptTemplate:
    """Prompt template with metadata and versioning"""
    name: str
    template: str
    version: str
    description: str
    variables: List[str]
    max_tokens: int = 2000
    temperature: float = 0.7
    system_prompt: str = ""

    def format(self, **kwargs) -> str:
        """Format template with provided variables"""
        self.validate_variables(**kwargs)
        return self.template.format(**kwargs)

    def validate_variables(self, **kwargs) -> bool:
        """Validate that all required variables are provided"""
        missing_vars = [var for var in self.variables if var not in kwargs]
        if missing_vars:
            raise ValueError(f"Missing required variables: {missing_vars}")
        return True


# Character limits and hashtag policy per platform
PLATFORM_LIMITS: Dict[str, Dict[str, Any]] = {
    "twitter": {"maxChars": 280, "supportsHashtags": True, "hashtagLimit": 10},
    "instagram": {"maxChars": 2200, "supportsHashtags": True, "hashtagLimit": 30},
    "linkedin": {"maxChars": 3000, "supportsHashtags": True, "hashtagLimit": 5},
    "facebook": {"maxChars": 63206, "supportsHashtags": False, "hashtagLimit": 0},
    "tiktok": {"maxChars": 300, "supportsHashtags": True, "hashtagLimit": 20},
}

POST_TYPE_GUIDELINES = {
    "promotional": "Focus on products/services benefits, include clear value proposition and call-to-action",
    "educational": "Provide valuable tips, insights, or how-to information that helps the audience",
    "behind_the_scenes": "Show authentic moments, company culture, or process insights",
    "user_generated": "Encourage audience participation, ask questions, create community engagement",
    "announcement": "Share news, updates, or important information clearly and excitingly",
    "inspirational": "Motivate and inspire audience with uplifting messages and stories",
    "entertaining": "Create fun, shareable content that brings joy while staying brand-appropriate",
}

PLATFORM_GUIDELINES = {
    "instagram": "Use visual language, emojis, and storytelling. Encourage saves and shares.",
    "twitter": "Be concise, timely, and conversational. Use trending topics when relevant.",
    "linkedin": "Professional tone, industry insights, thought leadership content.",
    "facebook": "Community-focused, longer-form content okay, encourage comments and discussions.",
    "tiktok": "Trendy, authentic, video-focused language. Use current slang appropriately.",
}


class PromptRegistry:
    """Registry for managing prompt templates"""

    def __init__(self):
        self.templates: Dict[str, Dict[str, PromptTemplate]] = {}
        self._initialize_default_templates()

    def _initialize_default_templates(self):
        """Initialize default prompt templates"""

        self.register_template(PromptTemplate(
            name="logo_prompt_synthesis",
            template="""Generate {count} optimized logo prompts for Stability AI image generation.

Business concept: {concept}
Style: {style}
Colors: {colors}
Include text: {include_text}

{brand_context}Requirements for each prompt:
1. Be specific about logo design elements
2. Mention it should be suitable for business use
3. Specify clean, professional design
4. Include style and color guidance
5. Keep under 200 characters each
6. Avoid copyrighted references

Return as JSON array of {count} strings:
["prompt 1", "prompt 2"]""",
            version="1.0",
            description="Turns a logo brief into image-generation prompts",
            variables=["count", "concept", "style", "colors", "include_text", "brand_context"],
            max_tokens=1200,
            temperature=0.8,
        ))

        self.register_template(PromptTemplate(
            name="business_name_generation",
            template="""Generate {count} creative and memorable business names for a {niche} business.

Style preference: {style}
{keywords}
{brand_context}Requirements:
1. Names should be 1-3 words
2. Easy to pronounce and remember
3. Suitable for domain registration
4. Avoid trademark conflicts
5. Match the specified style and niche

For each name, also suggest:
- The style category (compound, invented, descriptive, abstract, etc.)
- Why it works for this business

Format your response as a JSON array with this structure:
[
  {{
    "name": "Business Name",
    "style": "compound",
    "reasoning": "Why this name works"
  }}
]

Only return valid JSON, no additional text.""",
            version="1.0",
            description="Generates candidate business names with style and reasoning",
            variables=["count", "niche", "style", "keywords", "brand_context"],
            temperature=0.9,
        ))

        self.register_template(PromptTemplate(
            name="social_post_generation",
            template="""Generate {count} engaging {post_type} social media posts for {platform} about: {topic}

Platform requirements:
- Maximum {max_chars} characters
- Tone: {tone}
- {hashtag_rule}

{brand_context}Post type guidelines:
{post_type_guidelines}

Platform-specific requirements:
{platform_guidelines}

Requirements:
1. Stay within character limits
2. Match the specified tone
3. Be engaging and actionable
4. Include call-to-action where appropriate
5. Use platform best practices
6. Be authentic to the brand voice

Format as JSON array:
[
  {{
    "content": "Post content here",
    "hashtags": ["hashtag1", "hashtag2"]
  }}
]

Return only valid JSON, no additional text.""",
            version="1.0",
            description="Writes platform-specific social posts in the brand voice",
            variables=[
                "count", "post_type", "platform", "topic", "max_chars", "tone",
                "hashtag_rule", "brand_context", "post_type_guidelines", "platform_guidelines",
            ],
        ))

        self.register_template(PromptTemplate(
            name="slogan_generation",
            template="""Generate {count} creative and memorable marketing slogans for a company with the following details:

Company Name: {company_name}
Industry: {industry}
Brand Personality: {brand_personality}
Tone: {tone}
{keywords}
{brand_context}Requirements:
- Each slogan should be unique and memorable
- Keep slogans between 3-8 words
- Match the specified brand personality and tone
- Be appropriate for the {industry} industry
- Avoid generic or overused phrases
- Make them catchy and impactful

Return exactly {count} slogans as a JSON array of strings:
["Slogan one", "Slogan two"]""",
            version="1.0",
            description="Short marketing slogans in a given personality and tone",
            variables=["count", "company_name", "industry", "brand_personality", "tone", "keywords", "brand_context"],
            max_tokens=1000,
            temperature=0.9,
        ))

    def register_template(self, template: PromptTemplate):
        """Register a new template version"""
        self.templates.setdefault(template.name, {})[template.version] = template
        logger.debug(f"Registered prompt template {template.name} v{template.version}")

    def get_template(self, name: str, version: str = None) -> Optional[PromptTemplate]:
        """Get a template by name, latest version unless one is given"""
        versions = self.templates.get(name)
        if not versions:
            return None
        if version:
            return versions.get(version)
        latest = sorted(versions.keys(), key=lambda v: [int(p) for p in v.split(".")])[-1]
        return versions[latest]

    def list_templates(self) -> List[str]:
        return list(self.templates.keys())


_prompt_registry: Optional[PromptRegistry] = None


def get_prompt_registry() -> PromptRegistry:
    global _prompt_registry
    if _prompt_registry is None:
        _prompt_registry = PromptRegistry()
    return _prompt_registry


def _or(value: Any, default: str) -> str:
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value if v)
    return str(value) if value else default


def render_logo_brand_context(brand: Optional[Dict[str, Any]]) -> str:
    if not brand:
        return ""
    return (
        "Brand context:\n"
        f"- Name: {_or(brand.get('name'), 'Not specified')}\n"
        f"- Industry: {_or(brand.get('industry'), 'Not specified')}\n"
        f"- Tone: {_or(brand.get('tone_of_voice'), 'professional')}\n"
        f"- Target audience: {_or(brand.get('target_audience'), 'general')}\n\n"
    )


def render_name_brand_context(brand: Optional[Dict[str, Any]]) -> str:
    if not brand or not brand.get("name"):
        return ""
    return (
        "Brand context:\n"
        f"- Current brand: {brand['name']}\n"
        f"- Tagline: {_or(brand.get('tagline'), 'Not specified')}\n"
        f"- Mission: {_or(brand.get('mission'), 'Not specified')}\n"
        f"- Tone: {_or(brand.get('tone_of_voice'), 'Not specified')}\n"
        f"- Target audience: {_or(brand.get('target_audience'), 'Not specified')}\n"
        f"- Industry: {_or(brand.get('industry'), 'Not specified')}\n\n"
    )


def render_social_brand_context(brand: Optional[Dict[str, Any]]) -> str:
    if not brand:
        return ""
    return (
        "Brand context:\n"
        f"- Brand: {_or(brand.get('name'), 'Not specified')}\n"
        f"- Industry: {_or(brand.get('industry'), 'Not specified')}\n"
        f"- Target audience: {_or(brand.get('target_audience'), 'General')}\n"
        f"- Brand personality: {_or(brand.get('brand_personality'), 'Professional')}\n"
        f"- Mission: {_or(brand.get('mission'), 'Not specified')}\n\n"
    )


def build_logo_prompts_request(
    concept: str,
    style: str,
    colors: List[str],
    include_text: bool,
    brand: Optional[Dict[str, Any]] = None,
    count: int = 4,
) -> str:
    template = get_prompt_registry().get_template("logo_prompt_synthesis")
    return template.format(
        count=count,
        concept=concept,
        style=style,
        colors=", ".join(colors) if colors else "brand appropriate",
        include_text="yes" if include_text else "no",
        brand_context=render_logo_brand_context(brand),
    )


def fallback_logo_prompts(concept: str, style: str) -> List[str]:
    """Deterministic prompts used when prompt synthesis is unavailable"""
    return [
        f"Professional {style} logo for {concept}, clean design, suitable for business use",
        f"Modern minimal logo design for {concept} business, simple and memorable",
        f"Creative {style} style logo for {concept}, professional appearance",
        f"Clean business logo for {concept}, {style} design, corporate suitable",
    ]


def build_name_generation_prompt(
    niche: str,
    style: str,
    keywords: List[str],
    brand: Optional[Dict[str, Any]],
    count: int,
) -> str:
    template = get_prompt_registry().get_template("business_name_generation")
    return template.format(
        count=count,
        niche=niche,
        style=style,
        keywords=f"Keywords to consider: {', '.join(keywords)}\n" if keywords else "",
        brand_context=render_name_brand_context(brand),
    )


def build_social_post_prompt(
    platform: str,
    post_type: str,
    topic: str,
    tone: str,
    brand: Optional[Dict[str, Any]],
    include_hashtags: bool,
    count: int,
) -> str:
    info = PLATFORM_LIMITS[platform]
    if include_hashtags and info["supportsHashtags"]:
        hashtag_rule = f"Include relevant hashtags (max {info['hashtagLimit']})"
    else:
        hashtag_rule = "No hashtags needed"

    template = get_prompt_registry().get_template("social_post_generation")
    return template.format(
        count=count,
        post_type=post_type,
        platform=platform.upper(),
        topic=topic,
        max_chars=info["maxChars"],
        tone=tone,
        hashtag_rule=hashtag_rule,
        brand_context=render_social_brand_context(brand),
        post_type_guidelines=POST_TYPE_GUIDELINES.get(
            post_type, "Create engaging content that resonates with your audience"
        ),
        platform_guidelines=PLATFORM_GUIDELINES.get(
            platform, "Follow platform best practices for engagement"
        ),
    )


def build_slogan_prompt(
    company_name: str,
    industry: str,
    brand_personality: str,
    tone: str,
    keywords: List[str],
    brand: Optional[Dict[str, Any]],
    count: int,
) -> str:
    template = get_prompt_registry().get_template("slogan_generation")
    return template.format(
        count=count,
        company_name=company_name,
        industry=industry,
        brand_personality=brand_personality,
        tone=tone,
        keywords=f"Keywords to include: {', '.join(keywords)}\n" if keywords else "",
        brand_context=render_logo_brand_context(brand),
    )


def fallback_slogans(company_name: str, count: int = 5) -> List[str]:
    """Template slogans used when the completion is unavailable or unusable"""
    return [
        f"{company_name} - Your Success Story Starts Here",
        f"Experience Excellence with {company_name}",
        f"{company_name} - Innovation Meets Excellence",
        f"Trust {company_name} for Quality Results",
        f"{company_name} - Where Dreams Become Reality",
    ][:count]
