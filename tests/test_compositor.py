"""Tests for the compositor HTTP client."""

import pytest
import requests

from atelier.services import compositor as compositor_module
from atelier.services.compositor import CompositorError, HttpCompositor


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text
        self.reason = "Error"

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


@pytest.fixture
def http_compositor():
    return HttpCompositor(url="http://compositor.test/generate-images", timeout=5, api_key="secret")


class TestHttpCompositor:
    """Tests for HttpCompositor.generate."""

    def test_sends_request_and_parses_urls(self, http_compositor, monkeypatch):
        sent = {}

        def fake_post(url, json, headers, timeout):
            sent.update(url=url, json=json, headers=headers, timeout=timeout)
            return FakeResponse(body={
                "watermarkedImageUrl": "https://cdn/wm.jpg",
                "visualizationImageUrl": "https://cdn/room.jpg",
            })

        monkeypatch.setattr(compositor_module.requests, "post", fake_post)

        result = http_compositor.generate("art-1", force_watermark=True, force_visualization=False)

        assert result.watermarked_image_url == "https://cdn/wm.jpg"
        assert result.visualization_image_url == "https://cdn/room.jpg"
        assert sent["json"] == {
            "artworkId": "art-1",
            "forceWatermarkUpdate": True,
            "forceVisualizationUpdate": False,
        }
        assert sent["headers"]["Authorization"] == "Bearer secret"
        assert sent["timeout"] == 5

    def test_error_status(self, http_compositor, monkeypatch):
        monkeypatch.setattr(
            compositor_module.requests,
            "post",
            lambda *args, **kwargs: FakeResponse(status_code=502, text="bad gateway"),
        )
        with pytest.raises(CompositorError, match="502"):
            http_compositor.generate("art-1")

    def test_error_body(self, http_compositor, monkeypatch):
        monkeypatch.setattr(
            compositor_module.requests,
            "post",
            lambda *args, **kwargs: FakeResponse(body={"error": "image too small"}),
        )
        with pytest.raises(CompositorError, match="image too small"):
            http_compositor.generate("art-1")

    def test_timeout(self, http_compositor, monkeypatch):
        def fake_post(*args, **kwargs):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(compositor_module.requests, "post", fake_post)
        with pytest.raises(CompositorError, match="timed out"):
            http_compositor.generate("art-1")

    @pytest.mark.parametrize("body", [["x"], "ok", 3])
    def test_non_object_body(self, http_compositor, monkeypatch, body):
        monkeypatch.setattr(
            compositor_module.requests,
            "post",
            lambda *args, **kwargs: FakeResponse(body=body),
        )
        with pytest.raises(CompositorError, match="non-object body"):
            http_compositor.generate("art-1")
