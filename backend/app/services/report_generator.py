"""
Analytics report generation (PDF and CSV)

PDFs are rendered from a Jinja2 HTML template by a headless Chromium page.
The browser is shared through ``BrowserPool``: every render holds a lease,
and ``close()`` waits until all leases are returned before shutting the
browser down.
"""

import asyncio
import csv
import io
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional
import logging

from jinja2 import Environment, FileSystemLoader, select_autoescape
from playwright.async_api import Browser, Page, Playwright, async_playwright
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.models import ContentPost, SocialAccount, User

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

PDF_OPTIONS = {
    "format": "A4",
    "print_background": True,
    "margin": {"top": "20mm", "bottom": "20mm", "left": "15mm", "right": "15mm"},
}


class ReportError(Exception):
    pass


@dataclass
class ReportOptions:
    days: int = settings.REPORT_DEFAULT_DAYS
    platform: Optional[str] = None
    brand_color: str = settings.REPORT_BRAND_COLOR
    logo_url: Optional[str] = None


@dataclass
class ReportResult:
    success: bool
    filename: Optional[str] = None
    buffer: Optional[bytes] = None
    content: Optional[str] = None
    error: Optional[str] = None


class BrowserPool:
    """Lazily launched Chromium shared by concurrent renders"""

    def __init__(self, headless: Optional[bool] = None):
        self.headless = settings.PLAYWRIGHT_HEADLESS if headless is None else headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._leases = 0
        self._lock = asyncio.Lock()
        self._idle = asyncio.Condition(self._lock)

    @property
    def active_leases(self) -> int:
        return self._leases

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def _launch(self) -> Browser:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.headless,
            args=[
                "--disable-dev-shm-usage",
                "--disable-gpu",
                "--no-first-run",
            ],
        )
        logger.info("Launched report browser")
        return self._browser

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[Page]:
        """Lease a fresh page. The browser stays open while any lease is held."""
        async with self._lock:
            browser = self._browser or await self._launch()
            self._leases += 1

        page = None
        try:
            page = await browser.new_page(viewport={
                "width": settings.PLAYWRIGHT_VIEWPORT_WIDTH,
                "height": settings.PLAYWRIGHT_VIEWPORT_HEIGHT,
            })
            yield page
        finally:
            if page is not None:
                await page.close()
            async with self._idle:
                self._leases -= 1
                self._idle.notify_all()

    async def close(self) -> None:
        """Wait for in-flight renders, then shut the browser down"""
        async with self._idle:
            await self._idle.wait_for(lambda: self._leases == 0)
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
                logger.info("Report browser closed")


def compact_number(value: Any) -> str:
    num = value or 0
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def percent(value: Any) -> str:
    return f"{float(value or 0):.2f}%"


def engagement_rate(engagement: int, views: int) -> float:
    return round(engagement / views * 100, 2) if views > 0 else 0.0


class ReportGenerator:
    def __init__(self, browser_pool: Optional[BrowserPool] = None, template_dir: Optional[Path] = None):
        self.browser_pool = browser_pool or BrowserPool()
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["compact"] = compact_number
        self.env.filters["percent"] = percent

    def get_analytics_data(self, db: Session, user_id: str, options: ReportOptions) -> Dict[str, Any]:
        """Aggregate a user's posts in the day window using each post's latest metrics"""
        now = datetime.now(timezone.utc)
        start = now - timedelta(days=options.days)

        query = (
            db.query(ContentPost)
            .options(selectinload(ContentPost.metrics))
            .filter(ContentPost.user_id == user_id, ContentPost.created_at >= start)
        )
        if options.platform:
            query = query.filter(ContentPost.platform == options.platform)
        posts = query.order_by(ContentPost.created_at.desc()).all()

        accounts = db.query(SocialAccount).filter(
            SocialAccount.user_id == user_id,
            SocialAccount.is_active.is_(True),
        ).all()

        totals = {"views": 0, "likes": 0, "shares": 0, "comments": 0}
        platform_stats: Dict[str, Dict[str, Any]] = {}
        daily: Dict[str, Dict[str, Any]] = {}
        ranked = []

        for post in posts:
            latest = post.latest_metrics
            metrics = {
                "views": (latest.views if latest else 0) or 0,
                "likes": (latest.likes if latest else 0) or 0,
                "shares": (latest.shares if latest else 0) or 0,
                "comments": (latest.comments if latest else 0) or 0,
            }
            engagement = metrics["likes"] + metrics["shares"] + metrics["comments"]

            for key in totals:
                totals[key] += metrics[key]

            stats = platform_stats.setdefault(
                post.platform, {"posts": 0, "views": 0, "likes": 0, "shares": 0, "comments": 0}
            )
            stats["posts"] += 1
            for key in totals:
                stats[key] += metrics[key]

            day = post.created_at.date().isoformat()
            bucket = daily.setdefault(day, {"date": day, "posts": 0, "views": 0, "engagement": 0})
            bucket["posts"] += 1
            bucket["views"] += metrics["views"]
            bucket["engagement"] += engagement

            ranked.append({
                "id": post.id,
                "platform": post.platform,
                "content": post.content or "",
                "date": day,
                "metrics": metrics,
                "totalEngagement": engagement,
                "performanceScore": engagement + metrics["views"] * 0.1,
                "engagementRate": engagement_rate(engagement, metrics["views"]),
            })

        for stats in platform_stats.values():
            stats["engagementRate"] = engagement_rate(
                stats["likes"] + stats["shares"] + stats["comments"], stats["views"]
            )

        ranked.sort(key=lambda p: p["performanceScore"], reverse=True)

        return {
            "summary": {
                "totalPosts": len(posts),
                "totalViews": totals["views"],
                "totalLikes": totals["likes"],
                "totalShares": totals["shares"],
                "totalComments": totals["comments"],
                "engagementRate": engagement_rate(
                    totals["likes"] + totals["shares"] + totals["comments"], totals["views"]
                ),
                "dateRange": {
                    "from": start.date().isoformat(),
                    "to": now.date().isoformat(),
                    "days": options.days,
                },
            },
            "platformStats": platform_stats,
            "topPosts": ranked[:10],
            "dailyMetrics": sorted(daily.values(), key=lambda d: d["date"]),
            "connectedAccounts": [
                {
                    "platform": account.platform,
                    "username": account.username,
                    "displayName": account.display_name,
                    "connectedAt": account.connected_at.date().isoformat() if account.connected_at else None,
                    "lastSyncAt": account.last_sync_at.date().isoformat() if account.last_sync_at else None,
                }
                for account in accounts
            ],
        }

    @staticmethod
    def _get_user(db: Session, user_id: str) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise ReportError("User not found")
        return user

    @staticmethod
    def _filename(user: Optional[User], extension: str) -> str:
        email = user.email if user else "user"
        today = datetime.now(timezone.utc).date().isoformat()
        return f"analytics-report-{email}-{today}.{extension}"

    def render_html(self, user: User, data: Dict[str, Any], options: ReportOptions) -> str:
        template = self.env.get_template("analytics_report.html")
        return template.render(
            user=user,
            data=data,
            brand_color=options.brand_color,
            logo_url=options.logo_url,
            generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        )

    async def generate_pdf_report(self, db: Session, user_id: str, options: Optional[ReportOptions] = None) -> ReportResult:
        options = options or ReportOptions()
        try:
            user = self._get_user(db, user_id)
            data = self.get_analytics_data(db, user_id, options)
            html = self.render_html(user, data, options)

            async with self.browser_pool.acquire() as page:
                await page.set_content(html, wait_until="networkidle")
                pdf = await page.pdf(**PDF_OPTIONS)

            return ReportResult(success=True, buffer=pdf, filename=self._filename(user, "pdf"))
        except Exception as e:
            logger.error(f"PDF generation error for user {user_id}: {e}")
            return ReportResult(success=False, error=str(e))

    def build_csv(self, user: Optional[User], data: Dict[str, Any]) -> str:
        summary = data["summary"]
        rows: List[List[Any]] = [
            [
                "Report Generated For",
                user.email if user else "Unknown",
                "Date Range",
                f"{summary['dateRange']['from']} to {summary['dateRange']['to']}",
            ],
            [],
            ["SUMMARY STATISTICS"],
            ["Metric", "Value"],
            ["Total Posts", summary["totalPosts"]],
            ["Total Views", summary["totalViews"]],
            ["Total Likes", summary["totalLikes"]],
            ["Total Shares", summary["totalShares"]],
            ["Total Comments", summary["totalComments"]],
            ["Engagement Rate", percent(summary["engagementRate"])],
            [],
            ["PLATFORM PERFORMANCE"],
            ["Platform", "Posts", "Views", "Likes", "Shares", "Comments", "Engagement Rate"],
        ]
        for platform, stats in data["platformStats"].items():
            rows.append([
                platform, stats["posts"], stats["views"], stats["likes"],
                stats["shares"], stats["comments"], percent(stats["engagementRate"]),
            ])
        rows.extend([
            [],
            ["TOP PERFORMING POSTS"],
            ["Platform", "Date", "Content Preview", "Views", "Likes", "Shares", "Comments", "Engagement Rate"],
        ])
        for post in data["topPosts"][:10]:
            metrics = post["metrics"]
            rows.append([
                post["platform"], post["date"], post["content"][:100],
                metrics["views"], metrics["likes"], metrics["shares"], metrics["comments"],
                percent(post["engagementRate"]),
            ])

        out = io.StringIO()
        writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows(rows)
        return out.getvalue()

    def generate_csv_report(self, db: Session, user_id: str, options: Optional[ReportOptions] = None) -> ReportResult:
        options = options or ReportOptions()
        try:
            user = db.get(User, user_id)
            data = self.get_analytics_data(db, user_id, options)
            return ReportResult(
                success=True,
                content=self.build_csv(user, data),
                filename=self._filename(user, "csv"),
            )
        except Exception as e:
            logger.error(f"CSV generation error for user {user_id}: {e}")
            return ReportResult(success=False, error=str(e))


_browser_pool: Optional[BrowserPool] = None


def get_browser_pool() -> BrowserPool:
    global _browser_pool
    if _browser_pool is None:
        _browser_pool = BrowserPool()
    return _browser_pool


def get_report_generator() -> ReportGenerator:
    return ReportGenerator(browser_pool=get_browser_pool())
