"""Recipe conversion package.

Turns HTML pages with schema.org data and flat YAML exports into canonical
Mela recipe records, including image download and inline encoding.
"""

from mela_converter.app.services.conversion.extractors import (
    FlatFormatExtractor,
    RecipeExtractor,
    SchemaOrgExtractor,
    get_extractor_for_path,
)
from mela_converter.app.services.conversion.image_fetcher import (
    HttpxImageFetcher,
    ImageFetcher,
    ImageMaterializer,
)
from mela_converter.app.services.conversion.models import FetchedImage, RecipeFields
from mela_converter.app.services.conversion.recipe_builder import (
    RecipeBuilder,
    generate_recipe_id,
)
from mela_converter.app.services.conversion.text_utils import (
    TextNormalizer,
    join_lines,
    join_steps,
    to_proper_case,
    to_title_case,
)
from mela_converter.app.services.conversion.time_utils import (
    decode_created_timestamp,
    format_minutes,
    parse_free_text_minutes,
    parse_machine_duration,
)

__all__ = [
    # Models
    "FetchedImage",
    "RecipeFields",
    # Extractors
    "FlatFormatExtractor",
    "RecipeExtractor",
    "SchemaOrgExtractor",
    "get_extractor_for_path",
    # Images
    "HttpxImageFetcher",
    "ImageFetcher",
    "ImageMaterializer",
    # Builder
    "RecipeBuilder",
    "generate_recipe_id",
    # Text utilities
    "TextNormalizer",
    "join_lines",
    "join_steps",
    "to_proper_case",
    "to_title_case",
    # Time utilities
    "decode_created_timestamp",
    "format_minutes",
    "parse_free_text_minutes",
    "parse_machine_duration",
]
