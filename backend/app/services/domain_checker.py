"""
Domain availability heuristic.

A domain with no DNS ``A`` record is reported as likely available. This is
not a registrar lookup: parked or registered-but-unresolved domains read
as available too.
"""

import asyncio
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence
import logging

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
MAX_LABEL_LENGTH = 63


@dataclass
class DomainCheckResult:
    name: str
    domain_available: Optional[bool]
    available_extensions: List[str] = field(default_factory=list)
    id: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "domainAvailable": self.domain_available,
            "availableExtensions": self.available_extensions,
        }


def sanitize_domain_label(name: str) -> str:
    """Lowercase, keep only ``[a-z0-9]`` and cap at the DNS label limit"""
    return _NON_ALNUM.sub("", name.lower())[:MAX_LABEL_LENGTH]


class DomainChecker:
    def __init__(
        self,
        resolver_url: Optional[str] = None,
        extensions: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        delay: Optional[float] = None,
    ):
        self.resolver_url = resolver_url or settings.DNS_RESOLVER_URL
        self.extensions = list(extensions or settings.DOMAIN_EXTENSIONS)
        self.timeout = timeout if timeout is not None else settings.DOMAIN_CHECK_TIMEOUT
        self.delay = delay if delay is not None else settings.DOMAIN_CHECK_DELAY_SECONDS

    async def check_single_domain(self, client: httpx.AsyncClient, domain: str) -> bool:
        """True when the resolver returns no A records or cannot be reached"""
        try:
            response = await client.get(self.resolver_url, params={"name": domain, "type": "A"})
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"DNS lookup for {domain} failed, assuming available: {e}")
            return True
        return not data.get("Answer")

    async def check_name(self, client: httpx.AsyncClient, name: str, name_id: Optional[str] = None) -> DomainCheckResult:
        label = sanitize_domain_label(name)
        if not label:
            return DomainCheckResult(name=name, id=name_id, domain_available=False)

        try:
            available = []
            for ext in self.extensions:
                if await self.check_single_domain(client, f"{label}{ext}"):
                    available.append(ext)
        except Exception as e:
            logger.error(f"Domain check error for {label}: {e}")
            return DomainCheckResult(name=name, id=name_id, domain_available=None)

        return DomainCheckResult(
            name=name,
            id=name_id,
            domain_available=len(available) > 0,
            available_extensions=available,
        )

    async def check_names(self, names: Sequence[dict]) -> List[DomainCheckResult]:
        """
        Check each ``{"name": ..., "id": ...}`` entry sequentially.

        Names are spaced by ``delay`` seconds to stay under the resolver's
        rate limit.
        """
        results = []
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for index, entry in enumerate(names):
                if index and self.delay:
                    await asyncio.sleep(self.delay)
                results.append(await self.check_name(client, entry["name"], entry.get("id")))
        return results


def get_domain_checker() -> DomainChecker:
    return DomainChecker()
