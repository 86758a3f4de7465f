from abc import ABC, abstractmethod

from mela_converter.app.services.conversion.models import RecipeFields


class RecipeExtractor(ABC):
    """Turns the text of one source document into a `RecipeFields` bag."""

    format_name: str = ""
    suffixes: tuple = ()

    @abstractmethod
    def extract(self, content: str, source: str) -> RecipeFields:  # pragma: no cover - interface
        raise NotImplementedError
