import httpx
import pytest

from app.services.domain_checker import DomainChecker, sanitize_domain_label

RealAsyncClient = httpx.AsyncClient


def resolver(registered=(), broken=()):
    """MockTransport handler answering like a DNS-over-HTTPS JSON resolver"""
    def handler(request: httpx.Request) -> httpx.Response:
        domain = request.url.params["name"]
        assert request.url.params["type"] == "A"
        if domain in broken:
            raise httpx.ConnectError("resolver unreachable", request=request)
        if domain in registered:
            return httpx.Response(200, json={"Status": 0, "Answer": [{"data": "93.184.216.34"}]})
        return httpx.Response(200, json={"Status": 3})
    return handler


@pytest.fixture
def checker():
    return DomainChecker(
        resolver_url="https://dns.test/resolve",
        extensions=[".com", ".io"],
        timeout=1,
        delay=0,
    )


@pytest.mark.unit
class TestDomainChecker:

    @pytest.mark.parametrize("name, label", [
        ("Brew Peak!", "brewpeak"),
        ("Café-Noir 24", "cafnoir24"),
        ("x" * 80, "x" * 63),
        ("!!!", ""),
    ])
    def test_sanitize_domain_label(self, name, label):
        assert sanitize_domain_label(name) == label

    @pytest.mark.asyncio
    async def test_available_extensions(self, checker):
        transport = httpx.MockTransport(resolver(registered={"brewpeak.com"}))
        async with RealAsyncClient(transport=transport) as client:
            result = await checker.check_name(client, "Brew Peak", name_id="n1")

        assert result.id == "n1"
        assert result.domain_available is True
        assert result.available_extensions == [".io"]

    @pytest.mark.asyncio
    async def test_all_registered(self, checker):
        transport = httpx.MockTransport(resolver(registered={"brewpeak.com", "brewpeak.io"}))
        async with RealAsyncClient(transport=transport) as client:
            result = await checker.check_name(client, "BrewPeak")

        assert result.domain_available is False
        assert result.available_extensions == []

    @pytest.mark.asyncio
    async def test_resolver_failure_reads_as_available(self, checker):
        transport = httpx.MockTransport(resolver(broken={"brewpeak.com"}, registered={"brewpeak.io"}))
        async with RealAsyncClient(transport=transport) as client:
            result = await checker.check_name(client, "BrewPeak")

        assert result.available_extensions == [".com"]

    @pytest.mark.asyncio
    async def test_empty_label_is_unavailable(self, checker):
        async with RealAsyncClient(transport=httpx.MockTransport(resolver())) as client:
            result = await checker.check_name(client, "!!!")

        assert result.domain_available is False
        assert result.available_extensions == []

    @pytest.mark.asyncio
    async def test_unexpected_error_is_unknown(self, checker, mocker):
        mocker.patch.object(checker, "check_single_domain", side_effect=RuntimeError("boom"))
        async with RealAsyncClient(transport=httpx.MockTransport(resolver())) as client:
            result = await checker.check_name(client, "BrewPeak")

        assert result.domain_available is None

    @pytest.mark.asyncio
    async def test_check_names_keeps_order_and_ids(self, checker, mocker):
        transport = httpx.MockTransport(resolver(registered={"roastly.com", "roastly.io"}))
        mocker.patch(
            "app.services.domain_checker.httpx.AsyncClient",
            side_effect=lambda **kwargs: RealAsyncClient(transport=transport),
        )

        results = await checker.check_names([
            {"name": "BrewPeak", "id": "a"},
            {"name": "Roastly", "id": "b"},
        ])

        assert [(r.id, r.domain_available) for r in results] == [("a", True), ("b", False)]
        assert results[0].to_dict() == {
            "id": "a",
            "name": "BrewPeak",
            "domainAvailable": True,
            "availableExtensions": [".com", ".io"],
        }

    @pytest.mark.asyncio
    async def test_default_extensions(self):
        checker = DomainChecker(resolver_url="https://dns.test/resolve", delay=0)
        every_tld = {f"brewpeak{ext}" for ext in [".com", ".net", ".org", ".io", ".co"]}

        async with RealAsyncClient(transport=httpx.MockTransport(resolver(registered=every_tld))) as client:
            taken = await checker.check_name(client, "BrewPeak")
            free = await checker.check_name(client, "Roastly")

        assert taken.domain_available is False
        assert taken.available_extensions == []
        assert free.domain_available is True
        assert free.available_extensions == [".com", ".net", ".org", ".io", ".co"]
