import logging
import zipfile
from pathlib import Path

from mela_converter.app.schemas.recipe import CanonicalRecipe
from mela_converter.app.services.storage.base import ArchiveWriter, RecordStore

logger = logging.getLogger(__name__)


class LocalRecordStore(RecordStore):
    def __init__(self, output_dir: Path, extension: str = "melarecipe"):
        self.output_dir = Path(output_dir)
        self.extension = extension.lstrip(".")
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def record_name(self, recipe: CanonicalRecipe) -> str:
        return f"{recipe.id}.{self.extension}"

    def save(self, recipe: CanonicalRecipe) -> Path:
        destination = self.output_dir / self.record_name(recipe)
        destination.write_text(recipe.to_document(), encoding="utf-8")
        return destination


class ZipArchiveWriter(ArchiveWriter):
    """Writes named text documents into one deflate-compressed zip file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._zip = zipfile.ZipFile(self.path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9)

    def append(self, name: str, content: str) -> None:
        if self._zip is None:
            raise ValueError(f"Archive already finalized: {self.path}")
        self._zip.writestr(name, content.encode("utf-8"))

    def finalize(self) -> Path:
        if self._zip is not None:
            self._zip.close()
            self._zip = None
            logger.info("Created %s (%d bytes)", self.path.name, self.path.stat().st_size)
        return self.path
