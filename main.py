from __future__ import annotations

import asyncio
import logging
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv

from iconcss.builder import build_all
from iconcss.config import Settings, default_icon_sets, load_settings


def _setup_logging(settings: Settings) -> None:
    # Console always; optional rotating file
    log_format = "%(asctime)s %(levelname)s %(name)s %(message)s"
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format=log_format)
    if settings.log_file:
        try:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backups,
                encoding="utf-8",
            )
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(log_format))
            logging.getLogger().addHandler(fh)
        except Exception:
            logging.exception("Failed to set up file logging")


async def main() -> None:
    # Load .env if present
    load_dotenv()

    settings = load_settings()
    _setup_logging(settings)

    logging.info("Building icons from %s into %s", settings.icons_dir, settings.dist_dir)
    await build_all(default_icon_sets(settings.icons_dir), settings.dist_dir)


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
