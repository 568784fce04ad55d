import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


class IconSetConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    directory: Path
    prefix: str
    suffix: str | None = None
    # Keep the artwork's own colors (background) instead of recoloring (mask)
    colored: bool = False
    aspect_ratio: str = "1 / 1"

    @field_validator("directory", mode="before")
    @classmethod
    def _ensure_path(cls, v: Path | str) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("suffix", mode="before")
    @classmethod
    def _empty_suffix(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    icons_dir: Path
    dist_dir: Path
    # Logging
    log_file: Path | None = None
    log_level: str = "INFO"
    log_max_bytes: int = 5 * 1024 * 1024
    log_backups: int = 5

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").upper()

    @field_validator("icons_dir", "dist_dir", mode="before")
    @classmethod
    def _ensure_path(cls, v: Path | str) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("log_file", mode="before")
    @classmethod
    def _ensure_log_path(cls, v: str | Path | None) -> Path | None:
        if not v:
            return None
        return Path(v).expanduser().resolve()


def default_icon_sets(icons_dir: Path) -> list[IconSetConfig]:
    """The icon sets to build, in the order they are imported by index.css."""
    return [
        IconSetConfig(name="tabler", directory=icons_dir / "tabler", prefix="tabler"),
        IconSetConfig(name="bootstrap", directory=icons_dir / "bootstrap", prefix="bootstrap"),
        IconSetConfig(
            name="flags",
            directory=icons_dir / "flags" / "4x3",
            prefix="flag",
            suffix="4x3",
            colored=True,
            aspect_ratio="4 / 3",
        ),
        IconSetConfig(
            name="flags-square",
            directory=icons_dir / "flags" / "1x1",
            prefix="flag",
            suffix="1x1",
            colored=True,
        ),
    ]


def load_settings() -> Settings:
    icons_dir = (os.getenv("ICONS_DIR", "") or "src/icons").strip()
    dist_dir = (os.getenv("DIST_DIR", "") or "dist").strip()

    # Logging
    log_file_raw = os.getenv("LOG_FILE", "").strip()
    log_file = Path(log_file_raw).expanduser().resolve() if log_file_raw else None
    log_level = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
    log_max_bytes = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
    log_backups = int(os.getenv("LOG_BACKUPS", "5"))

    return Settings(
        icons_dir=icons_dir,
        dist_dir=dist_dir,
        log_file=log_file,
        log_level=log_level,
        log_max_bytes=log_max_bytes,
        log_backups=log_backups,
    )
