import base64
import logging

import httpx
import pytest

from mela_converter.app.services.conversion.image_fetcher import (
    HttpxImageFetcher,
    ImageMaterializer,
    resolve_redirect,
)
from mela_converter.app.services.conversion.models import FetchedImage

PNG_BYTES = b"\x89PNG\r\n\x1a\n/fake/png/bytes"


def make_fetcher(handler, **kwargs) -> HttpxImageFetcher:
    return HttpxImageFetcher(transport=httpx.MockTransport(handler), **kwargs)


def image_site(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/ok.png":
        return httpx.Response(200, headers={"content-type": "image/png"}, content=PNG_BYTES)
    if path == "/page.html":
        return httpx.Response(200, headers={"content-type": "text/html"}, content=b"<html></html>")
    if path.startswith("/hop/"):
        remaining = int(path.rsplit("/", 1)[1])
        target = "/ok.png" if remaining == 0 else f"/hop/{remaining - 1}"
        return httpx.Response(302, headers={"location": target})
    return httpx.Response(404)


@pytest.mark.asyncio
async def test_fetch_success_returns_tagged_image():
    fetched = await make_fetcher(image_site).fetch("https://example.com/ok.png")
    assert fetched is not None
    assert fetched.content_type == "image/png"
    assert fetched.data == PNG_BYTES


@pytest.mark.asyncio
async def test_fetch_drops_missing_image(caplog):
    with caplog.at_level(logging.WARNING):
        fetched = await make_fetcher(image_site).fetch("https://example.com/missing.png")
    assert fetched is None
    assert "404" in caplog.text


@pytest.mark.asyncio
async def test_fetch_drops_non_image_content_type():
    assert await make_fetcher(image_site).fetch("https://example.com/page.html") is None


@pytest.mark.asyncio
async def test_fetch_follows_five_redirects():
    # /hop/4 redirects five times before reaching /ok.png
    fetched = await make_fetcher(image_site).fetch("https://example.com/hop/4")
    assert fetched is not None
    assert fetched.content_type == "image/png"


@pytest.mark.asyncio
async def test_fetch_drops_after_six_redirects(caplog):
    with caplog.at_level(logging.WARNING):
        fetched = await make_fetcher(image_site).fetch("https://example.com/hop/5")
    assert fetched is None
    assert "Too many redirects" in caplog.text


@pytest.mark.asyncio
async def test_fetch_treats_timeouts_and_network_errors_as_unavailable():
    def timeout(request):
        raise httpx.ReadTimeout("too slow", request=request)

    def refused(request):
        raise httpx.ConnectError("refused", request=request)

    assert await make_fetcher(timeout).fetch("https://example.com/ok.png") is None
    assert await make_fetcher(refused).fetch("https://example.com/ok.png") is None


def test_resolve_redirect_uses_origin_for_relative_locations():
    assert resolve_redirect("https://cdn.example.com/a/b.png", "/c.png") == "https://cdn.example.com/c.png"
    assert resolve_redirect("https://cdn.example.com/a/b.png", "http://other.com/x.png") == "http://other.com/x.png"


@pytest.mark.asyncio
async def test_materialize_keeps_order_and_drops_failures():
    materializer = ImageMaterializer(make_fetcher(image_site))
    images = [
        "https://example.com/ok.png",
        "https://example.com/missing.png",
        "data:image/png;base64,AAAA",
        None,
        "https://example.com/hop/0",
    ]

    payloads = await materializer.materialize(images)

    expected = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")
    assert payloads == [expected, expected]
    # slashes in the payload stay unescaped
    assert "\\/" not in payloads[0]


@pytest.mark.asyncio
async def test_materialize_404_shrinks_output_by_one():
    materializer = ImageMaterializer(make_fetcher(image_site))
    payloads = await materializer.materialize(
        ["https://example.com/ok.png", "https://example.com/gone.png"]
    )
    assert len(payloads) == 1


@pytest.mark.asyncio
async def test_materialize_tags_payload_with_content_type_by_default():
    payloads = await ImageMaterializer(make_fetcher(image_site)).materialize(
        ["https://example.com/ok.png"]
    )
    assert len(payloads) == 1
    assert payloads[0].startswith("data:image/png;base64,")


@pytest.mark.asyncio
async def test_materialize_raw_format_is_bare_base64():
    materializer = ImageMaterializer(make_fetcher(image_site), payload_format="raw")
    payloads = await materializer.materialize(["https://example.com/ok.png"])
    assert payloads == [base64.b64encode(PNG_BYTES).decode("ascii")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url",
    [
        "http://example.com:abc/a.png",
        "https://[::1/x.png",
        "https://example.com/\x00.png",
    ],
)
async def test_fetch_drops_invalid_urls(url):
    assert await make_fetcher(image_site).fetch(url) is None


@pytest.mark.asyncio
async def test_materialize_skips_invalid_url_and_keeps_the_rest():
    payloads = await ImageMaterializer(make_fetcher(image_site)).materialize(
        ["http://example.com:abc/a.png", "https://example.com/ok.png"]
    )
    assert len(payloads) == 1


@pytest.mark.asyncio
async def test_materialize_fetches_sequentially(fake_fetcher):
    fake_fetcher.images = {
        "https://a.example/1.jpg": FetchedImage(content_type="image/jpeg", data=b"1"),
        "https://a.example/2.jpg": FetchedImage(content_type="image/jpeg", data=b"2"),
    }
    materializer = ImageMaterializer(fake_fetcher)

    payloads = await materializer.materialize(["https://a.example/2.jpg", "https://a.example/1.jpg"])

    assert fake_fetcher.requested == ["https://a.example/2.jpg", "https://a.example/1.jpg"]
    assert payloads == ["data:image/jpeg;base64,Mg==", "data:image/jpeg;base64,MQ=="]


def test_materializer_rejects_unknown_format(fake_fetcher):
    with pytest.raises(ValueError):
        ImageMaterializer(fake_fetcher, payload_format="hex")
