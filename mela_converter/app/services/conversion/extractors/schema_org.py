"""Schema.org recipe extraction from JSON-LD, with microdata fallback."""

import json
import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from mela_converter.app.services.conversion.extractors.base import RecipeExtractor
from mela_converter.app.services.conversion.models import RecipeFields
from mela_converter.app.services.conversion.text_utils import as_text, join_lines, join_steps
from mela_converter.app.services.conversion.time_utils import (
    parse_compact_minutes,
    parse_free_text_minutes,
    parse_machine_duration,
)

logger = logging.getLogger(__name__)


def _is_recipe(obj: Dict[str, Any]) -> bool:
    obj_type = obj.get("@type")
    types = [obj_type] if isinstance(obj_type, str) else (obj_type or [])
    return any(str(t).lower() == "recipe" for t in types)


def find_structured_data(soup: BeautifulSoup, source: str = "") -> Optional[Dict[str, Any]]:
    """Locate the schema.org Recipe object embedded as JSON-LD.

    Every JSON-LD block is considered, including `@graph` containers and
    top-level lists. A Recipe-typed object wins; failing that, the first
    object that carries no `@type` at all. Blocks that are not valid JSON are
    logged and skipped.
    """
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    logger.debug("Found %d JSON-LD script blocks in %s", len(scripts), source)

    untyped = None
    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json or not raw_json.strip():
            logger.debug("JSON-LD block %d in %s is empty", idx, source)
            continue
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            logger.warning("Failed to parse JSON-LD block %d in %s: %s", idx, source, exc)
            continue

        candidates = []
        if isinstance(data, dict) and isinstance(data.get("@graph"), list):
            candidates.extend(data["@graph"])
        if isinstance(data, list):
            candidates.extend(data)
        elif isinstance(data, dict) and "@graph" not in data:
            candidates.append(data)

        for obj in candidates:
            if not isinstance(obj, dict):
                continue
            if _is_recipe(obj):
                logger.debug("Using Recipe object from JSON-LD block %d in %s", idx, source)
                return obj
            if untyped is None and "@type" not in obj:
                untyped = obj
    return untyped


def _markup_text(soup: BeautifulSoup, selector: str) -> str:
    element = soup.select_one(selector)
    return element.get_text().strip() if element else ""


def _markup_texts(soup: BeautifulSoup, selector: str) -> List[str]:
    return [element.get_text().strip() for element in soup.select(selector)]


def _as_list(value) -> list:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _image_refs(value) -> List[str]:
    refs: List[str] = []
    for item in _as_list(value):
        if isinstance(item, str):
            refs.append(item)
        elif isinstance(item, dict):
            url = item.get("url") or item.get("contentUrl")
            if isinstance(url, str):
                refs.append(url)
    return refs


def _structured_minutes(value) -> int:
    # duration codes come back as "1h 30m"; anything else is scanned as free text
    rendered = parse_machine_duration(value)
    return parse_compact_minutes(rendered) or parse_free_text_minutes(rendered)


def _instruction_steps(value) -> List[str]:
    steps: List[str] = []
    for entry in _as_list(value):
        if isinstance(entry, dict):
            if entry.get("text"):
                steps.append(as_text(entry["text"]))
            elif entry.get("itemListElement"):
                # HowToSection
                steps.extend(_instruction_steps(entry["itemListElement"]))
        elif entry is not None:
            steps.append(str(entry))
    return steps


def _author_link(author) -> str:
    if isinstance(author, list):
        return _author_link(author[0]) if author else ""
    if isinstance(author, dict):
        return as_text(author.get("url"))
    if isinstance(author, str):
        return author
    return ""


def extract_title(data: Optional[dict], soup: BeautifulSoup) -> str:
    if data and data.get("name"):
        return as_text(data["name"]).strip()
    return _markup_text(soup, '[itemprop="name"], h1')


def extract_description(data: Optional[dict], soup: BeautifulSoup) -> str:
    if data and data.get("description"):
        return as_text(data["description"])
    return _markup_text(soup, '[itemprop="description"]')


def extract_images(data: Optional[dict], soup: BeautifulSoup) -> List[str]:
    """Union of structured-data images and image elements, in document order."""
    images: List[str] = []
    if data and data.get("image"):
        images.extend(_image_refs(data["image"]))
    for element in soup.select('[itemprop="image"], img'):
        src = element.get("src") or element.get("content")
        if src and src not in images:
            images.append(src)
    return images


def extract_categories(data: Optional[dict]) -> List[str]:
    categories: List[str] = []
    if not data:
        return categories
    for category in _as_list(data.get("recipeCategory")):
        text = as_text(category).strip()
        if text:
            categories.append(text)
    for keywords in _as_list(data.get("keywords")):
        if not isinstance(keywords, str):
            continue
        categories.extend(kw.strip() for kw in keywords.split(",") if kw.strip())
    return categories


def extract_yield(data: Optional[dict], soup: BeautifulSoup) -> str:
    if data and data.get("recipeYield"):
        value = data["recipeYield"]
        if isinstance(value, list):
            return ", ".join(as_text(item) for item in value)
        return as_text(value)
    return _markup_text(soup, '[itemprop="recipeYield"]')


def extract_minutes(data: Optional[dict], soup: BeautifulSoup, prop: str) -> int:
    """Minutes for `prepTime` or `cookTime`.

    Microdata values are scanned as free text only, so a duration code found
    in markup contributes nothing.
    """
    if data and data.get(prop):
        return _structured_minutes(data[prop])
    return parse_free_text_minutes(_markup_text(soup, f'[itemprop="{prop}"]'))


def extract_ingredients(data: Optional[dict], soup: BeautifulSoup) -> str:
    if data and data.get("recipeIngredient"):
        return join_lines(as_text(item) for item in _as_list(data["recipeIngredient"]))
    return join_lines(_markup_texts(soup, '[itemprop="recipeIngredient"]'))


def extract_instructions(data: Optional[dict], soup: BeautifulSoup) -> str:
    if data and data.get("recipeInstructions"):
        return join_steps(_instruction_steps(data["recipeInstructions"]))
    return join_steps(
        _markup_texts(soup, '[itemprop="recipeInstruction"], [itemprop="recipeInstructions"]')
    )


def extract_nutrition(data: Optional[dict], soup: BeautifulSoup) -> str:
    if data and data.get("nutrition"):
        return as_text(data["nutrition"])
    return _markup_text(soup, '[itemprop="nutrition"]')


def extract_link(data: Optional[dict], soup: BeautifulSoup) -> str:
    if data and data.get("author"):
        link = _author_link(data["author"])
        if link:
            return link
    return _markup_text(soup, '[itemprop="author"]')


class SchemaOrgExtractor(RecipeExtractor):
    """Extractor for HTML pages carrying schema.org Recipe data."""

    format_name = "html"
    suffixes = (".html", ".htm")

    def extract(self, content: str, source: str = "") -> RecipeFields:
        soup = BeautifulSoup(content, "lxml")
        data = find_structured_data(soup, source)
        if data is None:
            logger.info("No structured recipe data in %s; using microdata", source)
        return self.extract_fields(soup, data)

    def extract_fields(self, soup: BeautifulSoup, data: Optional[dict]) -> RecipeFields:
        return RecipeFields(
            title=extract_title(data, soup),
            text=extract_description(data, soup),
            images=extract_images(data, soup),
            categories=extract_categories(data),
            yield_=extract_yield(data, soup),
            prep_minutes=extract_minutes(data, soup, "prepTime"),
            cook_minutes=extract_minutes(data, soup, "cookTime"),
            other_minutes=0,
            ingredients=extract_ingredients(data, soup),
            instructions=extract_instructions(data, soup),
            notes=as_text(data.get("notes")) if data else "",
            nutrition=extract_nutrition(data, soup),
            link=extract_link(data, soup),
        )
