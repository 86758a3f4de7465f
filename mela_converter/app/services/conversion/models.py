"""Pydantic models for recipe conversion."""

import base64
from typing import List, Optional

from pydantic import BaseModel, Field


class RecipeFields(BaseModel):
    """Everything an extractor pulled out of one source document.

    Times are already reduced to whole minutes; casing and formatting are
    applied later by the recipe builder.
    """

    title: str = ""
    text: str = ""
    images: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    yield_: str = ""
    prep_minutes: int = 0
    cook_minutes: int = 0
    other_minutes: int = 0
    ingredients: str = ""
    instructions: str = ""
    notes: str = ""
    nutrition: str = ""
    link: str = ""
    favorite: bool = False
    want_to_cook: bool = False
    date: Optional[int] = None


class FetchedImage(BaseModel):
    """Raw image bytes returned by an image fetcher."""

    content_type: str
    data: bytes

    @property
    def data_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.content_type};base64,{self.data_base64}"
