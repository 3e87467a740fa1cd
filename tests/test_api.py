"""Tests for the FastAPI endpoints."""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from conftest import MIN_ID, MIN_NAME_HEX, MIN_POLICY, FakeDex, FakeProvider
from vyswap.api.app import create_app
from vyswap.services import aggregator_service
from vyswap.utils.once import OnceCell


@pytest.fixture
def fake_dex(make_pool):
    """VyFinance stand-in with one ADA/MIN pool."""
    return FakeDex([make_pool()], receive=498_500, impact=0.1)


@pytest.fixture
def cell_for(make_service):
    """Build an aggregator cell serving the given DEX."""

    def _make(dex):
        return OnceCell(lambda: make_service(dex, provider=FakeProvider()))

    return _make


@pytest.fixture
def app(test_settings, fake_dex, cell_for):
    return create_app(test_settings, cell_for(fake_dex))


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


ESTIMATE = {"swapInAsset": "lovelace", "swapInAmount": "1000000", "swapOutAsset": MIN_ID}


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data
        assert data["uptime"] >= 0

    @pytest.mark.asyncio
    async def test_detailed_health_does_not_initialize(self, client):
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["aggregator"] == "uninitialized"
        assert data["config"]["providers"]["blockfrost"]["project_id"] == "(not set)"

    @pytest.mark.asyncio
    async def test_security_headers(self, client):
        response = await client.get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"
        assert "x-request-id" in response.headers

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "message": "Route GET /api/nope not found"}


class TestEstimateEndpoint:
    """Tests for POST /api/swap/estimate."""

    @pytest.mark.asyncio
    async def test_estimate_success(self, client, fake_dex):
        """One pool: 200 with the DEX's figures."""
        response = await client.post("/api/swap/estimate", json=ESTIMATE)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True

        swap = body["data"]["swap"]
        assert swap["swapInAmount"] == "1000000"
        assert swap["estimatedReceive"] == "498500"
        assert swap["pricePerUnit"] == "498500"
        assert swap["priceImpactPercent"] == pytest.approx(0.1)
        assert swap["swapInAsset"] == "lovelace"
        assert swap["swapOutAsset"] == MIN_ID

        pool = body["data"]["pool"]
        assert pool == {
            "address": "addr1_pool",
            "dex": "VyFinance",
            "assetA": "ADA",
            "assetB": MIN_POLICY + MIN_NAME_HEX,
        }

        # Unit price is priced at exactly one whole input unit
        assert fake_dex.receive_calls == [1_000_000, 10**6]

    @pytest.mark.asyncio
    async def test_unit_price_uses_decimals_in(self, client, fake_dex):
        response = await client.post("/api/swap/estimate", json={**ESTIMATE, "decimalsIn": 2})

        assert response.status_code == 200
        assert fake_dex.receive_calls[-1] == 100

    @pytest.mark.asyncio
    async def test_integer_amount_accepted(self, client):
        response = await client.post("/api/swap/estimate", json={**ESTIMATE, "swapInAmount": 1000000})

        assert response.status_code == 200
        assert response.json()["data"]["swap"]["swapInAmount"] == "1000000"

    @pytest.mark.asyncio
    async def test_no_pool_is_404(self, client, fake_dex):
        """Zero pools: 404 Pool Not Found."""
        fake_dex.pools = []

        response = await client.post("/api/swap/estimate", json=ESTIMATE)

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Pool Not Found"
        assert MIN_ID in body["message"]

    @pytest.mark.asyncio
    async def test_missing_field_is_400_without_provider_call(self, client, app, fake_dex):
        """Missing swapOutAsset: 400 before any provider access."""
        payload = {k: v for k, v in ESTIMATE.items() if k != "swapOutAsset"}

        response = await client.post("/api/swap/estimate", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Missing required fields: swapOutAsset"
        assert body["error"] == "Bad Request"
        assert "swapOutAsset" in body["message"]
        assert fake_dex.pool_queries == 0
        assert app.state.aggregator_cell.state == "uninitialized"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "override",
        [
            {"swapInAsset": ""},
            {"swapInAmount": "abc"},
            {"swapInAmount": "-5"},
            {"swapInAmount": "0"},
            {"swapInAmount": 1.5},
            {"swapOutAsset": "not-an-asset"},
            {"decimalsIn": -1},
        ],
    )
    async def test_invalid_input_is_400(self, client, fake_dex, override):
        response = await client.post("/api/swap/estimate", json={**ESTIMATE, **override})

        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"
        assert fake_dex.pool_queries == 0

    @pytest.mark.asyncio
    async def test_upstream_failure_is_500(self, client, fake_dex):
        fake_dex.error = httpx.ConnectError("kupo unreachable")

        response = await client.post("/api/swap/estimate", json=ESTIMATE)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Upstream Error"
        assert "kupo unreachable" in body["message"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, test_settings, make_pool, cell_for):
        """Debug mode still answers with the JSON error body, not a traceback page."""
        assert test_settings.debug is True

        class BrokenDex(FakeDex):
            def estimated_receive(self, pool, token_in, amount_in):
                raise RuntimeError("math exploded")

        app = create_app(test_settings, cell_for(BrokenDex([make_pool()])))
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post("/api/swap/estimate", json=ESTIMATE)

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Internal Server Error", "message": "math exploded"}


class TestMisconfiguredProvider:
    """No Kupo or Blockfrost configuration."""

    @pytest.mark.asyncio
    async def test_configuration_error_is_cached(self, test_settings, monkeypatch):
        """Both requests fail identically; configuration runs once."""
        calls = []
        original = aggregator_service.configure_data_provider

        def counting(service, settings):
            calls.append(settings)
            return original(service, settings)

        monkeypatch.setattr(aggregator_service, "configure_data_provider", counting)

        app = create_app(test_settings)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            first = await client.post("/api/swap/estimate", json=ESTIMATE)
            second = await client.post("/api/swap/estimate", json=ESTIMATE)
            info = await client.get("/api/swap/info")

        assert first.status_code == 500
        assert first.json() == {
            "error": "Configuration Error",
            "message": "No data provider configured. Set KUPO_URL or BLOCKFROST credentials in .env",
        }
        assert second.status_code == 500
        assert second.json() == first.json()
        assert info.json() == first.json()
        assert len(calls) == 1
        assert app.state.aggregator_cell.state == "failed"


class TestBuildEndpoint:
    """Tests for POST /api/swap/build."""

    @pytest.mark.asyncio
    async def test_build_not_implemented(self, client):
        response = await client.post(
            "/api/swap/build", json={**ESTIMATE, "walletAddress": "addr1_wallet"}
        )

        assert response.status_code == 501
        body = response.json()
        assert body["error"] == "Not Implemented"
        assert "CIP-30" in body["message"]
        assert "suggestion" in body

    @pytest.mark.asyncio
    async def test_build_requires_wallet(self, client):
        response = await client.post("/api/swap/build", json=ESTIMATE)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields: walletAddress"


class TestPoolsEndpoint:
    """Tests for GET /api/swap/pools."""

    @pytest.mark.asyncio
    async def test_list_all(self, client, fake_dex, make_pool, sundae_asset):
        fake_dex.pools.append(make_pool(asset_b=sundae_asset, address="addr1_sundae"))

        response = await client.get("/api/swap/pools")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 2
        first = data["pools"][0]
        assert first["assetA"] == {"identifier": "lovelace", "name": "ADA"}
        assert first["assetB"] == {"identifier": MIN_POLICY + MIN_NAME_HEX, "name": "MIN"}
        assert first["reserveA"] == "1000000000000"
        assert first["reserveB"] == "500000000000"

    @pytest.mark.asyncio
    async def test_filtered_by_pair(self, client, fake_dex, make_pool, sundae_asset):
        fake_dex.pools.append(make_pool(asset_b=sundae_asset, address="addr1_sundae"))

        response = await client.get(
            "/api/swap/pools", params={"assetA": "ada", "assetB": MIN_ID, "decimalsB": "6"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 1
        assert data["pools"][0]["address"] == "addr1_pool"

    @pytest.mark.asyncio
    async def test_single_asset_lists_everything(self, client, fake_dex, make_pool, sundae_asset):
        fake_dex.pools.append(make_pool(asset_b=sundae_asset, address="addr1_sundae"))

        response = await client.get("/api/swap/pools", params={"assetA": "lovelace"})

        assert response.json()["data"]["count"] == 2

    @pytest.mark.asyncio
    async def test_malformed_asset_is_400(self, client):
        response = await client.get("/api/swap/pools", params={"assetA": "ada", "assetB": "junk"})

        assert response.status_code == 400


class TestInfoEndpoint:
    """Tests for GET /api/swap/info."""

    @pytest.mark.asyncio
    async def test_info(self, client):
        response = await client.get("/api/swap/info")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["dex"] == "VyFinance"
        assert data["dataProvider"] == "Fake"
        assert data["availableDexs"] == ["VyFinance"]
        assert data["swapFees"][0]["value"] == "1900000"
        assert data["swapFees"][0]["isReturned"] is False
