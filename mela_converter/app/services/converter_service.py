import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel

from mela_converter.app.core.config import Settings, get_settings
from mela_converter.app.schemas.recipe import CanonicalRecipe
from mela_converter.app.services.conversion import (
    FlatFormatExtractor,
    HttpxImageFetcher,
    ImageFetcher,
    ImageMaterializer,
    RecipeBuilder,
    SchemaOrgExtractor,
    TextNormalizer,
    get_extractor_for_path,
)
from mela_converter.app.services.storage.base import ArchiveWriter, RecordStore
from mela_converter.app.services.storage.local import LocalRecordStore, ZipArchiveWriter

logger = logging.getLogger(__name__)

COMMANDS = ("html", "yml", "all")


class ConversionSummary(BaseModel):
    html_count: int = 0
    yml_count: int = 0
    output_dir: Path
    bundle_path: Optional[Path] = None

    @property
    def total(self) -> int:
        return self.html_count + self.yml_count


def discover_files(directory: Path, suffixes: Sequence[str]) -> List[Path]:
    """Files in `directory` (not recursive) whose suffix is one of `suffixes`."""
    if not directory.is_dir():
        return []
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix.lower() in suffixes
    )


class RecipeConverter:
    """Drives a conversion run: discover, extract, build, fetch images, persist."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetcher: Optional[ImageFetcher] = None,
        record_store: Optional[RecordStore] = None,
        archive_factory: Callable[[Path], ArchiveWriter] = ZipArchiveWriter,
    ):
        self.settings = settings or get_settings()
        self.builder = RecipeBuilder(TextNormalizer(self.settings.title_case_mode))
        if fetcher is None:
            fetcher = HttpxImageFetcher(
                timeout=self.settings.image_fetch_timeout_seconds,
                max_redirects=self.settings.image_max_redirects,
                user_agent=self.settings.scraper_user_agent,
            )
        self.materializer = ImageMaterializer(fetcher, self.settings.image_payload_format)
        self.record_store = record_store or LocalRecordStore(
            self.settings.output_dir, self.settings.record_extension
        )
        self.archive_factory = archive_factory

    async def convert_file(self, path: Path) -> Optional[CanonicalRecipe]:
        """Convert and persist one file; failures are logged and yield None."""
        extractor = get_extractor_for_path(path)
        if extractor is None:
            logger.warning("No extractor for %s; skipping", path.name)
            return None
        try:
            content = path.read_text(encoding="utf-8")
            fields = extractor.extract(content, path.name)
            recipe = self.builder.build(fields, path)
            logger.info("  Processing images for: %s", recipe.title)
            recipe.images = await self.materializer.materialize(recipe.images)
            destination = self.record_store.save(recipe)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error converting %s: %s", path.name, exc)
            return None
        logger.info("Converted: %s", destination)
        return recipe

    async def _convert_directory(
        self, directory: Path, suffixes: Sequence[str], label: str
    ) -> List[CanonicalRecipe]:
        if not directory.is_dir():
            logger.info("%s directory not found: %s", label, directory)
            return []
        recipes: List[CanonicalRecipe] = []
        for path in discover_files(directory, suffixes):
            logger.info("Converting %s: %s", label, path.name)
            recipe = await self.convert_file(path)
            if recipe is not None:
                recipes.append(recipe)
        return recipes

    async def convert_html_files(self) -> List[CanonicalRecipe]:
        return await self._convert_directory(
            self.settings.html_dir, SchemaOrgExtractor.suffixes, "HTML"
        )

    async def convert_yml_files(self) -> List[CanonicalRecipe]:
        return await self._convert_directory(
            self.settings.yml_dir, FlatFormatExtractor.suffixes, "YML"
        )

    def write_bundle(self, recipes: Sequence[CanonicalRecipe]) -> Optional[Path]:
        """Bundle every record of the run; a later record wins on a shared id."""
        if not recipes:
            return None
        documents: Dict[str, str] = {}
        for recipe in recipes:
            documents[self.record_store.record_name(recipe)] = recipe.to_document()
        archive = self.archive_factory(self.settings.bundle_path)
        for name, content in documents.items():
            archive.append(name, content)
        return archive.finalize()

    async def run(self, command: str = "all") -> ConversionSummary:
        if command not in COMMANDS:
            raise ValueError(f"Unknown command: {command}")
        logger.info("Starting recipe conversion (%s)...", command)

        html_recipes = await self.convert_html_files() if command in ("html", "all") else []
        yml_recipes = await self.convert_yml_files() if command in ("yml", "all") else []
        bundle_path = self.write_bundle(html_recipes + yml_recipes)

        summary = ConversionSummary(
            html_count=len(html_recipes),
            yml_count=len(yml_recipes),
            output_dir=self.settings.output_dir,
            bundle_path=bundle_path,
        )
        logger.info("Conversion complete!")
        logger.info("HTML recipes converted: %d", summary.html_count)
        logger.info("YML recipes converted: %d", summary.yml_count)
        logger.info("Total recipes: %d", summary.total)
        logger.info("Output directory: %s", summary.output_dir)
        return summary

    async def convert_all(self) -> ConversionSummary:
        return await self.run("all")
