"""
Completion response parsing.

Each generator first tries a strict parse: the JSON array in the completion
text is validated against a pydantic model. When that fails the matching
heuristic extractor runs instead. Every heuristic use is logged and counted
by ``parse_monitor`` so the rate can be watched from ``/health``.
"""

import json
import re
import threading
from collections import Counter
from typing import Any, Dict, List, Optional
import logging

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


class NameSuggestion(BaseModel):
    name: str = Field(min_length=1)
    style: str = "generated"
    reasoning: str = "AI generated name"

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class PostSuggestion(BaseModel):
    content: str = Field(min_length=1)
    hashtags: List[str] = []

    @field_validator("hashtags", mode="before")
    @classmethod
    def normalize_hashtags(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split()
        return [str(tag).lstrip("#").strip() for tag in v if str(tag).strip("# ")]


_logo_prompts = TypeAdapter(List[str])
_names = TypeAdapter(List[NameSuggestion])
_posts = TypeAdapter(List[PostSuggestion])
_slogans = TypeAdapter(List[str])


class ParseMonitor:
    """Thread-safe counters of strict vs heuristic parse outcomes"""

    def __init__(self):
        self._counts: Counter = Counter()
        self._lock = threading.Lock()

    def record(self, kind: str, outcome: str) -> None:
        with self._lock:
            self._counts[(kind, outcome)] += 1
        if outcome != "strict":
            logger.warning(f"Completion for {kind} parsed with outcome '{outcome}'")

    def count(self, kind: str, outcome: str) -> int:
        with self._lock:
            return self._counts[(kind, outcome)]

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        with self._lock:
            stats: Dict[str, Dict[str, int]] = {}
            for (kind, outcome), value in self._counts.items():
                stats.setdefault(kind, {})[outcome] = value
            return stats

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


parse_monitor = ParseMonitor()


def extract_json_array(text: str) -> Optional[str]:
    """Return the outermost ``[...]`` span, looking inside code fences first"""
    if not text:
        return None
    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1)
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def _strict(adapter: TypeAdapter, text: str):
    span = extract_json_array(text)
    if span is None:
        return None
    try:
        return adapter.validate_python(json.loads(span))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.debug(f"Strict parse rejected completion: {e}")
        return None


# Heuristic extractors. Only used when the strict parse returned nothing.

_QUOTED_RE = re.compile(r'["\']([^"\']+)["\']')
_WORDS_RE = re.compile(r"\b([A-Z][a-zA-Z]*(?:\s+[A-Z][a-zA-Z]*){0,2})\b")
_NUMBERED_RE = re.compile(r"^\d+\.")
_HASHTAG_RE = re.compile(r"#(\w+)")
_LIST_MARKER_RE = re.compile(r"^(?:\d+[.)]|[-*\u2022])\s*")


def heuristic_names(text: str) -> List[NameSuggestion]:
    """Pull names out of free text: numbered lines or lines mentioning a name"""
    names = []
    for raw in text.splitlines():
        line = raw.strip()
        if "name" not in line.lower() and not _NUMBERED_RE.match(line):
            continue
        match = _QUOTED_RE.search(line)
        candidate = match.group(1) if match else None
        if candidate is None:
            body = _NUMBERED_RE.sub("", line)
            words = _WORDS_RE.search(body)
            candidate = words.group(1) if words else None
        if candidate and candidate.strip() and candidate.strip().lower() != "name":
            names.append(NameSuggestion(
                name=candidate.strip(),
                style="generated",
                reasoning="AI generated name",
            ))
    return names


def heuristic_posts(text: str, limit: int = 3) -> List[PostSuggestion]:
    """Treat each substantial non-comment line as a post body"""
    posts = []
    for raw in text.splitlines():
        line = raw.strip()
        if len(line) <= 10 or line.startswith("#") or line.startswith("//"):
            continue
        content = _HASHTAG_RE.sub("", line).strip()
        if not content:
            continue
        posts.append(PostSuggestion(content=content, hashtags=_HASHTAG_RE.findall(line)))
        if len(posts) >= limit:
            break
    return posts



def heuristic_slogans(text: str, limit: int = 10) -> List[str]:
    """One slogan per line, with list markers and surrounding quotes removed"""
    slogans = []
    for raw in text.splitlines():
        line = _LIST_MARKER_RE.sub("", raw.strip()).strip().strip("\"'").strip()
        if not line or line.endswith(":") or line.startswith("```"):
            continue
        slogans.append(line)
        if len(slogans) >= limit:
            break
    return slogans

def parse_logo_prompts(text: str) -> List[str]:
    """Prompt strings from a logo meta-prompt completion. No heuristic: empty means fallback templates."""
    parsed = _strict(_logo_prompts, text)
    prompts = [p.strip() for p in parsed or [] if p and p.strip()]
    parse_monitor.record("logo_prompts", "strict" if prompts else "fallback_templates")
    return prompts


def parse_name_suggestions(text: str) -> List[NameSuggestion]:
    parsed = _strict(_names, text)
    if parsed:
        parse_monitor.record("names", "strict")
        return parsed
    names = heuristic_names(text)
    parse_monitor.record("names", "heuristic" if names else "empty")
    return names


def parse_post_suggestions(text: str, limit: int = 3) -> List[PostSuggestion]:
    parsed = _strict(_posts, text)
    if parsed:
        parse_monitor.record("social_posts", "strict")
        return parsed
    posts = heuristic_posts(text, limit=limit)
    parse_monitor.record("social_posts", "heuristic" if posts else "empty")
    return posts


def parse_slogans(text: str, limit: int = 10) -> List[str]:
    parsed = _strict(_slogans, text)
    slogans = [s.strip() for s in parsed or [] if s and s.strip()][:limit]
    if slogans:
        parse_monitor.record("slogans", "strict")
        return slogans
    slogans = heuristic_slogans(text, limit=limit)
    parse_monitor.record("slogans", "heuristic" if slogans else "empty")
    return slogans
