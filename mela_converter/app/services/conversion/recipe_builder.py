import time
import uuid
from pathlib import Path
from typing import Optional

from mela_converter.app.schemas.recipe import CanonicalRecipe
from mela_converter.app.services.conversion.models import RecipeFields
from mela_converter.app.services.conversion.text_utils import TextNormalizer
from mela_converter.app.services.conversion.time_utils import format_minutes


def generate_recipe_id(source_path) -> str:
    """Filename without extension, or a fresh UUID when that is empty."""
    stem = Path(source_path).stem if source_path else ""
    return stem or str(uuid.uuid4())


class RecipeBuilder:
    def __init__(self, normalizer: Optional[TextNormalizer] = None):
        self.normalizer = normalizer or TextNormalizer()

    def build(self, fields: RecipeFields, source_path) -> CanonicalRecipe:
        total_minutes = fields.prep_minutes + fields.cook_minutes + fields.other_minutes
        return CanonicalRecipe(
            id=generate_recipe_id(source_path),
            title=self.normalizer.title(fields.title),
            text=fields.text,
            images=list(fields.images),
            categories=list(fields.categories),
            yield_=fields.yield_,
            prep_time=format_minutes(fields.prep_minutes),
            cook_time=format_minutes(fields.cook_minutes),
            total_time=format_minutes(total_minutes),
            ingredients=fields.ingredients,
            instructions=fields.instructions,
            notes=fields.notes,
            nutrition=fields.nutrition,
            link=fields.link,
            favorite=fields.favorite,
            want_to_cook=fields.want_to_cook,
            date=fields.date if fields.date is not None else int(time.time()),
        )
