import base64
import os
from contextlib import asynccontextmanager

# Settings are read at import time, so the test environment goes first
os.environ["DATABASE_URL"] = "sqlite:///./test_launchzone.db"
os.environ["JOB_EXECUTION_MODE"] = "inline"
os.environ["LOGO_ITERATION_DELAY_SECONDS"] = "0"
os.environ["DOMAIN_CHECK_DELAY_SECONDS"] = "0"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.api import deps
from app.core.security import create_access_token
from app.db.init_db import init_db
from app.db.session import Base, SessionLocal, engine
from app.services.ai.base import AIServiceError
from app.services.ai.image_generation import GeneratedImage
from app.services.ai.parsing import parse_monitor
from app.services.domain_checker import DomainCheckResult
from app.services.logo_generation import LogoGenerationRunner
from app.services.report_generator import ReportGenerator
from app.services.storage import StorageError
from tests.factories import UserFactory, BrandProfileFactory


class FakeStorage:
    """In-memory stand-in for the asset bucket"""

    def __init__(self, fail_upload=False, fail_remove=False):
        self.objects = {}
        self.removed = []
        self.fail_upload = fail_upload
        self.fail_remove = fail_remove

    def upload(self, path, data, content_type="image/png"):
        if self.fail_upload:
            raise StorageError("Upload failed: bucket unavailable")
        self.objects[path] = data
        return f"https://storage.test/brand-assets/{path}"

    def remove(self, path):
        if self.fail_remove:
            raise StorageError("Delete failed: bucket unavailable")
        self.removed.append(path)
        self.objects.pop(path, None)


class FakeImageClient:
    """
    Scripted image provider. Each entry in ``outcomes`` is consumed per call:
    True gives an image, None gives no image, an exception instance is raised.
    """

    model_tag = "stability-diffusion-xl"
    size = 1024

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes) if outcomes is not None else None
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        outcome = True if not self.outcomes else self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            return None
        return GeneratedImage(
            base64=base64.b64encode(b"\x89PNG fake image").decode(),
            seed=len(self.prompts),
        )


class FakeCompletion:
    """Returns canned completion text, or raises when ``error`` is set"""

    def __init__(self, text="", error=False):
        self.text = text
        self.error = error
        self.prompts = []

    async def complete(self, prompt, **kwargs):
        self.prompts.append(prompt)
        if self.error:
            raise AIServiceError("AI generation failed: provider unavailable", "anthropic", "test-model")
        return self.text


class FakePage:
    def __init__(self):
        self.html = None
        self.pdf_options = None
        self.closed = False

    async def set_content(self, html, wait_until=None):
        self.html = html

    async def pdf(self, **options):
        self.pdf_options = options
        return b"%PDF-1.4 fake"

    async def close(self):
        self.closed = True


class FakeBrowserPool:
    """Hands out FakePage leases without launching a browser"""

    def __init__(self):
        self.pages = []

    @asynccontextmanager
    async def acquire(self):
        page = FakePage()
        self.pages.append(page)
        try:
            yield page
        finally:
            await page.close()

    async def close(self):
        pass


class FakeDomainChecker:
    """Every name is available on .com only"""

    def __init__(self, available=True):
        self.available = available
        self.checked = []

    async def check_names(self, names):
        self.checked.extend(entry["name"] for entry in names)
        return [
            DomainCheckResult(
                name=entry["name"],
                id=entry.get("id"),
                domain_available=self.available,
                available_extensions=[".com"] if self.available else [],
            )
            for entry in names
        ]


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test on the application engine."""
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def save(db_session):
    """Persist factory-built instances and return them refreshed."""
    def _save(*instances):
        db_session.add_all(instances)
        db_session.commit()
        for instance in instances:
            db_session.refresh(instance)
        return instances[0] if len(instances) == 1 else instances
    return _save


@pytest.fixture(autouse=True)
def reset_parse_monitor():
    parse_monitor.reset()
    yield
    parse_monitor.reset()


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def fake_image_client():
    return FakeImageClient()


@pytest.fixture
def fake_completion():
    return FakeCompletion(text='["prompt one", "prompt two", "prompt three", "prompt four"]')


@pytest.fixture
def fake_domain_checker():
    return FakeDomainChecker()


@pytest.fixture
def logo_runner(fake_storage, fake_image_client, fake_completion):
    return LogoGenerationRunner(
        session_factory=SessionLocal,
        completion_service=fake_completion,
        image_client=fake_image_client,
        storage=fake_storage,
        iteration_delay=0,
    )


@pytest.fixture
def fake_browser_pool():
    return FakeBrowserPool()


@pytest.fixture
def report_generator(fake_browser_pool):
    return ReportGenerator(browser_pool=fake_browser_pool)


@pytest.fixture
def override_services(fake_storage, fake_completion, fake_domain_checker, logo_runner, report_generator):
    """Route every external client dependency to the fakes."""
    app.dependency_overrides[deps.get_storage] = lambda: fake_storage
    app.dependency_overrides[deps.get_completion_service] = lambda: fake_completion
    app.dependency_overrides[deps.get_domain_checker] = lambda: fake_domain_checker
    app.dependency_overrides[deps.get_logo_runner] = lambda: logo_runner
    app.dependency_overrides[deps.get_report_generator] = lambda: report_generator
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(db_session, override_services):
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_user(save):
    """Create a sample user for testing."""
    return save(UserFactory.build())


@pytest.fixture
def other_user(save):
    return save(UserFactory.build())


@pytest.fixture
def sample_brand_profile(save, sample_user):
    """Create a sample brand profile for testing."""
    return save(BrandProfileFactory.build(user_id=sample_user.id))


@pytest.fixture
def auth_headers(sample_user):
    token = create_access_token(sample_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user):
    token = create_access_token(other_user.id)
    return {"Authorization": f"Bearer {token}"}
