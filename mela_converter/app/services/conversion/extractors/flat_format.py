"""Flat key-value (YAML) recipe extraction."""

import logging
from typing import List

import yaml

from mela_converter.app.services.conversion.extractors.base import RecipeExtractor
from mela_converter.app.services.conversion.models import RecipeFields
from mela_converter.app.services.conversion.text_utils import join_lines, join_steps, split_lines
from mela_converter.app.services.conversion.time_utils import (
    decode_created_timestamp,
    parse_free_text_minutes,
)

logger = logging.getLogger(__name__)


def _text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _image_refs(value) -> List[str]:
    # a scalar image, or a YAML list of them; non-string entries are ignored
    items = value if isinstance(value, list) else [value]
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]


def _is_yes(value) -> bool:
    # PyYAML reads an unquoted `yes` as a boolean
    if value is True:
        return True
    return isinstance(value, str) and value.strip().lower() == "yes"


class FlatFormatExtractor(RecipeExtractor):
    """Extractor for flat YAML recipe exports."""

    format_name = "yml"
    suffixes = (".yml", ".yaml")

    def extract(self, content: str, source: str = "") -> RecipeFields:
        data = yaml.safe_load(content)
        if not data:
            raise ValueError(f"Empty recipe document: {source}")
        if not isinstance(data, dict):
            raise ValueError(f"Recipe document is not a mapping: {source}")
        return self.extract_fields(data)

    def extract_fields(self, data: dict) -> RecipeFields:
        created = decode_created_timestamp(data.get("created"))
        if data.get("created") and created is None:
            logger.debug("Could not decode created stamp %r", data.get("created"))
        return RecipeFields(
            title=_text(data.get("name")).strip(),
            text=_text(data.get("notes")),
            images=_image_refs(data.get("image")),
            categories=split_lines(data.get("tags")),
            yield_=_text(data.get("servings")),
            prep_minutes=parse_free_text_minutes(data.get("prep_time")),
            cook_minutes=parse_free_text_minutes(data.get("cook_time")),
            other_minutes=parse_free_text_minutes(data.get("other_time")),
            ingredients=join_lines(split_lines(data.get("ingredients"))),
            instructions=join_steps(split_lines(data.get("directions"))),
            notes=_text(data.get("notes")),
            nutrition=_text(data.get("nutritional_info")),
            link=_text(data.get("source")),
            favorite=_is_yes(data.get("favorite")) or _is_yes(data.get("on_favorites")),
            date=created,
        )
