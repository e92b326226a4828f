"""HTTP API tests, driven in-process through httpx's ASGI transport."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend import app
from tests.snippets import JAVA_HELLO, PY_FIBONACCI, PY_NESTED_LOOPS

BASE = "http://test"


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE) as c:
        yield c


class TestMeta:
    @pytest.mark.asyncio
    async def test_root_lists_languages(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.json()["languages"] == ["python", "java", "cpp", "c", "javascript"]

    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestExecute:
    @pytest.mark.asyncio
    async def test_fibonacci(self, client):
        resp = await client.post("/execute", json={"code": PY_FIBONACCI, "language": "python"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "success"
        assert body["output"] == "55"
        assert body["executionTime"] >= 0

    @pytest.mark.asyncio
    async def test_language_alias(self, client):
        resp = await client.post("/execute", json={"code": PY_FIBONACCI, "language": "py"})
        assert resp.json()["output"] == "55"

    @pytest.mark.asyncio
    async def test_empty_code_is_error_result(self, client):
        resp = await client.post("/execute", json={"code": "", "language": "java"})
        assert resp.status_code == 200
        assert resp.json() == {"status": "error", "output": "error: no code to execute", "executionTime": 0}

    @pytest.mark.asyncio
    async def test_unknown_language_rejected(self, client):
        resp = await client.post("/execute", json={"code": "x = 1", "language": "cobol"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_language_rejected(self, client):
        resp = await client.post("/execute", json={"code": "x = 1"})
        assert resp.status_code == 422


class TestAnalyzeAndInsights:
    @pytest.mark.asyncio
    async def test_analyze(self, client):
        resp = await client.post("/analyze", json={"code": PY_NESTED_LOOPS, "language": "python"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["timeComplexity"] == {"best": "O(n²)", "average": "O(n²)", "worst": "O(n²)"}
        assert body["spaceComplexity"] == "O(1)"
        assert body["analysis"]

    @pytest.mark.asyncio
    async def test_insights_use_posted_profile(self, client):
        profile = (await client.post("/analyze", json={"code": PY_FIBONACCI, "language": "python"})).json()
        resp = await client.post(
            "/insights",
            json={"code": PY_FIBONACCI, "language": "python", "profile": profile},
        )
        assert resp.status_code == 200
        insights = resp.json()["insights"]
        assert [i["type"] for i in insights] == ["optimization", "optimization", "warning"]
        assert insights[0]["code"]["language"] == "python"

    @pytest.mark.asyncio
    async def test_insights_reject_bad_profile(self, client):
        profile = {
            "timeComplexity": {"best": "O(n²)", "average": "O(n)", "worst": "O(n)"},
            "spaceComplexity": "O(1)",
            "analysis": "x",
        }
        resp = await client.post("/insights", json={"code": "x = 1", "language": "python", "profile": profile})
        assert resp.status_code == 422


class TestRun:
    @pytest.mark.asyncio
    async def test_success_includes_analysis(self, client):
        resp = await client.post("/run", json={"code": JAVA_HELLO, "language": "java"})
        body = resp.json()
        assert body["execution"]["output"] == "Hello, World!"
        assert body["complexity"]["timeComplexity"]["worst"] == "O(1)"
        assert [i["title"] for i in body["insights"]][:2] == ["Add Error Handling", "Add Documentation"]

    @pytest.mark.asyncio
    async def test_error_skips_analysis(self, client):
        resp = await client.post("/run", json={"code": "public class Main {", "language": "java"})
        body = resp.json()
        assert body["execution"]["status"] == "error"
        assert body["complexity"] is None
        assert body["insights"] is None
