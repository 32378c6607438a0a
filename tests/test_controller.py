import asyncio
import json

import httpx
import pytest

from macreader.controller import ResultsView, SearchController, SearchQuery


def _payload(*titles) -> bytes:
    return json.dumps({"items": [
        {"id": f"id-{n}", "volumeInfo": {"title": t}} for n, t in enumerate(titles)
    ]}).encode("utf-8")


def test_search_query_is_trimmed():
    assert SearchQuery.parse("  dune \t").text == "dune"


@pytest.mark.parametrize("raw", ["", "   ", "\n\t", None])
def test_search_query_rejects_blank(raw):
    with pytest.raises(ValueError):
        SearchQuery.parse(raw)


@pytest.mark.parametrize("raw", ["", "   ", "\n\t "])
async def test_blank_query_issues_no_request(make_query_client, raw):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, content=_payload("X"))

    controller = SearchController(make_query_client(handler))

    assert controller.submit(raw) is None
    await controller.wait()
    assert controller.drain() == 0
    assert calls == []
    assert controller.view.version == 0


async def test_completion_is_applied_only_by_consumer(make_query_client):
    controller = SearchController(make_query_client(lambda r: httpx.Response(200, content=_payload("Dune"))))

    controller.submit("dune")
    await controller.wait()

    # finished, but not yet delivered to the view
    assert controller.view.items == []
    assert controller.drain() == 1
    assert [i.title for i in controller.view.items] == ["Dune"]
    assert controller.view.query == "dune"


async def test_next_search_replaces_results(make_query_client):
    def handler(request):
        return httpx.Response(200, content=_payload(request.url.params["q"].upper()))

    controller = SearchController(make_query_client(handler))

    controller.submit("first")
    await controller.wait()
    controller.drain()
    controller.submit("second")
    await controller.wait()
    controller.drain()

    assert [i.title for i in controller.view.items] == ["SECOND"]
    assert controller.view.version == 2


async def test_last_completion_wins(make_query_client):
    async def handler(request):
        q = request.url.params["q"]
        if q == "slow":
            await asyncio.sleep(0.05)
        return httpx.Response(200, content=_payload(q))

    controller = SearchController(make_query_client(handler))

    slow = controller.submit("slow")
    fast = controller.submit("fast")
    assert controller.in_flight == 2
    await controller.wait()

    # neither request was cancelled
    assert not slow.cancelled() and not fast.cancelled()
    assert controller.drain() == 2
    assert controller.view.query == "slow"
    assert [i.title for i in controller.view.items] == ["slow"]


@pytest.mark.parametrize("response", [
    httpx.Response(200, content=b""),
    httpx.Response(200, content=b"<html>oops</html>"),
])
async def test_errors_leave_view_untouched(make_query_client, response):
    controller = SearchController(make_query_client(lambda r: response), view=ResultsView())
    controller.view.replace("previous", [])

    controller.submit("dune")
    await controller.wait()

    assert controller.drain() == 0
    assert controller.view.query == "previous"
    assert controller.view.version == 1


async def test_network_error_is_logged(make_query_client, caplog):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    controller = SearchController(make_query_client(handler))

    controller.submit("dune")
    await controller.wait()

    assert controller.drain() == 0
    assert "NetworkError" in caplog.text


async def test_run_consumes_completions(make_query_client):
    controller = SearchController(make_query_client(lambda r: httpx.Response(200, content=_payload("A", "B"))))
    consumer = asyncio.create_task(controller.run())
    try:
        controller.submit("ab")
        await controller.wait()
        await asyncio.wait_for(controller.join(), timeout=1)
    finally:
        consumer.cancel()

    assert [i.title for i in controller.view.items] == ["A", "B"]


async def test_unencodable_query_leaves_view_untouched(make_query_client, caplog):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, content=_payload("X"))

    controller = SearchController(make_query_client(handler))
    controller.view.replace("previous", [])

    controller.submit("dune \udcff")
    await controller.wait()

    assert controller.drain() == 0
    assert calls == []
    assert controller.view.query == "previous"
    assert "InvalidURLError" in caplog.text


async def test_unexpected_error_ends_only_that_search(make_query_client):
    def handler(request):
        if request.url.params["q"] == "boom":
            raise RuntimeError("unexpected")
        return httpx.Response(200, content=_payload("Dune"))

    controller = SearchController(make_query_client(handler))

    controller.submit("boom")
    controller.submit("dune")
    await controller.wait()

    assert controller.drain() == 1
    assert [i.title for i in controller.view.items] == ["Dune"]
