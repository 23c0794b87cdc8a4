"""Client for the external image compositor (watermarks, room visualizations)."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from atelier.config import settings

logger = logging.getLogger(__name__)


class CompositorError(Exception):
    """Compositor call failed or returned an unusable response."""
    pass


@dataclass
class CompositorResult:
    """Derived image URLs produced by the compositor."""

    watermarked_image_url: Optional[str] = None
    visualization_image_url: Optional[str] = None


class BaseCompositor(ABC):
    """Interface of the compositor collaborator."""

    @abstractmethod
    def generate(
        self,
        artwork_id: str,
        force_watermark: bool = False,
        force_visualization: bool = False,
    ) -> CompositorResult:
        """Generate derived images for an artwork.

        Args:
            artwork_id: Artwork ID
            force_watermark: Regenerate the watermark even if one exists
            force_visualization: Regenerate the visualization even if one exists

        Returns:
            CompositorResult with the resulting URLs

        Raises:
            CompositorError: If generation fails
        """
        pass


class HttpCompositor(BaseCompositor):
    """Compositor reached over HTTP."""

    def __init__(self, url: str, timeout: float, api_key: Optional[str] = None):
        self.url = url
        self.timeout = timeout
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def generate(
        self,
        artwork_id: str,
        force_watermark: bool = False,
        force_visualization: bool = False,
    ) -> CompositorResult:
        payload = {
            "artworkId": artwork_id,
            "forceWatermarkUpdate": force_watermark,
            "forceVisualizationUpdate": force_visualization,
        }
        try:
            response = requests.post(
                self.url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise CompositorError(f"Compositor timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise CompositorError(f"Compositor request failed: {e}") from e

        try:
            body: Dict[str, Any] = response.json()
        except ValueError:
            body = {}

        if not isinstance(body, dict):
            raise CompositorError(
                f"Compositor returned {response.status_code} with a non-object body: {body!r}"
            )

        if not response.ok or body.get("error"):
            message = body.get("error") or response.text or response.reason
            raise CompositorError(f"Compositor returned {response.status_code}: {message}")

        logger.debug(f"Compositor response for artwork {artwork_id}: {body}")
        return CompositorResult(
            watermarked_image_url=body.get("watermarkedImageUrl"),
            visualization_image_url=body.get("visualizationImageUrl"),
        )


def get_compositor() -> BaseCompositor:
    """Get compositor client configured from settings."""
    return HttpCompositor(
        url=settings.compositor_url,
        timeout=settings.compositor_timeout_seconds,
        api_key=settings.compositor_api_key,
    )
