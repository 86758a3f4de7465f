import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    recipes_dir: Path = Field(Path("recipes"), alias="MELA_RECIPES_DIR")
    html_subdir: str = Field("HTML", alias="MELA_HTML_SUBDIR")
    yml_subdir: str = Field("YML", alias="MELA_YML_SUBDIR")
    output_dir: Path = Field(Path("output"), alias="MELA_OUTPUT_DIR")
    record_extension: str = Field("melarecipe", alias="MELA_RECORD_EXTENSION")
    bundle_name: str = Field("recipes.melarecipes", alias="MELA_BUNDLE_NAME")
    title_case_mode: Literal["title", "proper"] = Field("title", alias="MELA_TITLE_CASE_MODE")
    # "data_url" keeps the content type with the bytes; "raw" is bare base64 for Mela imports
    image_payload_format: Literal["raw", "data_url"] = Field("data_url", alias="MELA_IMAGE_PAYLOAD_FORMAT")
    image_fetch_timeout_seconds: float = Field(15.0, alias="MELA_IMAGE_FETCH_TIMEOUT_SECONDS")
    image_max_redirects: int = Field(5, alias="MELA_IMAGE_MAX_REDIRECTS")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    log_level: str = Field("INFO", alias="MELA_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    @property
    def html_dir(self) -> Path:
        return self.recipes_dir / self.html_subdir

    @property
    def yml_dir(self) -> Path:
        return self.recipes_dir / self.yml_subdir

    @property
    def bundle_path(self) -> Path:
        return self.output_dir / self.bundle_name


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
