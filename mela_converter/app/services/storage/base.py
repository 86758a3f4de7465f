from abc import ABC, abstractmethod
from pathlib import Path

from mela_converter.app.schemas.recipe import CanonicalRecipe


class RecordStore(ABC):
    @abstractmethod
    def save(self, recipe: CanonicalRecipe) -> Path:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def record_name(self, recipe: CanonicalRecipe) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class ArchiveWriter(ABC):
    @abstractmethod
    def append(self, name: str, content: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def finalize(self) -> Path:  # pragma: no cover - interface
        raise NotImplementedError
