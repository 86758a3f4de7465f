import json
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanonicalRecipe(BaseModel):
    """A recipe in the Mela `.melarecipe` document layout."""

    id: str
    title: str = ""
    text: str = ""
    images: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    yield_: str = Field("", alias="yield")
    prep_time: str = ""
    cook_time: str = ""
    total_time: str = ""
    ingredients: str = ""
    instructions: str = ""
    notes: str = ""
    nutrition: str = ""
    link: str = ""
    favorite: bool = False
    want_to_cook: bool = False
    date: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> str:
        """Render the record as the JSON text written to disk and into the bundle."""
        return json.dumps(self.model_dump(by_alias=True), indent=2, ensure_ascii=False)
