from typing import Dict, List, Optional

import pytest

from mela_converter.app.core.config import Settings
from mela_converter.app.services.conversion import FetchedImage, ImageFetcher


class FakeImageFetcher(ImageFetcher):
    """Serves canned images by URL and records every requested URL."""

    def __init__(self, images: Optional[Dict[str, FetchedImage]] = None):
        self.images = images or {}
        self.requested: List[str] = []

    async def fetch(self, url: str) -> Optional[FetchedImage]:
        self.requested.append(url)
        return self.images.get(url)


@pytest.fixture
def recipes_dir(tmp_path):
    root = tmp_path / "recipes"
    (root / "HTML").mkdir(parents=True)
    (root / "YML").mkdir(parents=True)
    return root


@pytest.fixture
def settings(tmp_path, recipes_dir):
    return Settings(
        _env_file=None,
        recipes_dir=recipes_dir,
        output_dir=tmp_path / "output",
    )


@pytest.fixture
def fake_fetcher():
    return FakeImageFetcher()
