import asyncio
import json

import httpx
import pytest

from domprobe import pipeline
from domprobe.config import Settings
from domprobe.pipeline import process_domain_batch, run

TAKEN = {"taken.com", "b.com"}


def handler(request):
    if request.url.params["name"] in TAKEN:
        return httpx.Response(200, json={"Status": 0, "Answer": [{"type": 6}]})
    return httpx.Response(200, json={"Status": 3})


def _batch(domains, **kwargs):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await process_domain_batch(domains, 1000, client, delay=0, **kwargs)

    return asyncio.run(go())


def test_batch_has_one_entry_per_domain():
    results = _batch(["a.com", "b.com"])
    assert results == {"a.com": True, "b.com": False}
    assert list(results) == ["a.com", "b.com"]


def test_batch_duplicates_collapse():
    results = _batch(["a.com", "taken.com", "a.com"])
    assert list(results) == ["a.com", "taken.com"]


def test_batch_isolates_failures(monkeypatch):
    calls = []

    async def flaky(domain, client=None, endpoints=None, timeout=None):
        calls.append((domain, timeout))
        if domain == "bad.com":
            raise RuntimeError("boom")
        return True

    monkeypatch.setattr(pipeline, "check_domain_availability", flaky)
    results = _batch(["a.com", "bad.com", "c.com"])
    assert results == {"a.com": True, "bad.com": False, "c.com": True}
    # timeout en ms converti en secondes pour chaque requête
    assert calls == [("a.com", 1.0), ("bad.com", 1.0), ("c.com", 1.0)]


def test_batch_is_sequential(monkeypatch):
    in_flight = 0
    peak = 0

    async def slow(domain, client=None, endpoints=None, timeout=None):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0)
        in_flight -= 1
        return False

    monkeypatch.setattr(pipeline, "check_domain_availability", slow)
    _batch(["a.com", "b.com", "c.com"])
    assert peak == 1


def test_batch_sleeps_between_domains(monkeypatch):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(pipeline.asyncio, "sleep", fake_sleep)

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await process_domain_batch(["a.com", "b.com"], 1000, client)

    asyncio.run(go())
    assert sleeps == [0.5, 0.5]


def test_batch_timeout_is_enforced():
    def timing_out(request):
        raise httpx.ReadTimeout("slow", request=request)

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(timing_out)) as client:
            return await process_domain_batch(["a.com"], 10, client, delay=0)

    assert asyncio.run(go()) == {"a.com": False}


@pytest.mark.parametrize("domains", [[], ["a.com"]])
def test_run_writes_outputs(tmp_path, domains):
    settings = Settings(timeout_ms=1000, delay=0)

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await run(domains + ["taken.com"], tmp_path, settings, client)

    results = asyncio.run(go())
    assert [r.domain for r in results] == domains + ["taken.com"]

    data = json.loads((tmp_path / "results.json").read_text(encoding="utf-8"))
    assert data[-1] == {"domain": "taken.com", "available": False, "status": "registered"}
    assert (tmp_path / "results.csv").read_text(encoding="utf-8").startswith("domain,available,status")
    assert (tmp_path / "registered.txt").read_text(encoding="utf-8") == "taken.com\n"
    expected = "a.com\n" if domains else ""
    assert (tmp_path / "available.txt").read_text(encoding="utf-8") == expected
