"""Recipe extractors for the supported source formats."""

from pathlib import Path
from typing import Optional

from mela_converter.app.services.conversion.extractors.base import RecipeExtractor
from mela_converter.app.services.conversion.extractors.flat_format import FlatFormatExtractor
from mela_converter.app.services.conversion.extractors.schema_org import (
    SchemaOrgExtractor,
    find_structured_data,
)

EXTRACTORS = (SchemaOrgExtractor(), FlatFormatExtractor())


def get_extractor_for_path(path) -> Optional[RecipeExtractor]:
    """Pick the extractor by file suffix; no content sniffing."""
    suffix = Path(path).suffix.lower()
    for extractor in EXTRACTORS:
        if suffix in extractor.suffixes:
            return extractor
    return None


__all__ = [
    "EXTRACTORS",
    "FlatFormatExtractor",
    "RecipeExtractor",
    "SchemaOrgExtractor",
    "find_structured_data",
    "get_extractor_for_path",
]
