from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .config import IconSetConfig
from .svg import class_name, icon_name_from_path, svg_to_data_uri

UTILITIES_FILE = "utilities.css"
INDEX_FILE = "index.css"

_SHARED_DECLARATIONS = (
    "    @apply inline-block h-[1em] overflow-hidden align-[-0.125em] select-none cursor-default;\n"
    "    --icon-aspect-ratio: {aspect_ratio};\n"
    "    aspect-ratio: var(--icon-aspect-ratio);\n"
)


@dataclass
class BuildSummary:
    built_sets: list[str] = field(default_factory=list)
    total_icons: int = 0

    def text(self) -> str:
        return f"Total: {self.total_icons} icons across {len(self.built_sets)} icon set(s)"


def generate_utility(config: IconSetConfig, icon_name: str, svg_content: str) -> str:
    data_uri = svg_to_data_uri(svg_content)
    body = _SHARED_DECLARATIONS.format(aspect_ratio=config.aspect_ratio)
    if config.colored:
        body += f'    background: url("{data_uri}") center / contain no-repeat;\n'
    else:
        body += (
            "    color: var(--icon-color, currentColor);\n"
            "    background: var(--icon-color, currentColor);\n"
            f'    mask: url("{data_uri}") center / contain no-repeat;\n'
        )
    return f"@utility {class_name(config, icon_name)} {{\n  :where(&) {{\n{body}  }}\n}}\n"


def generate_utilities_css() -> str:
    return "@utility icon-* {\n  --icon-color: --value(--color-*);\n}\n"


def collect_svg_files(directory: Path) -> list[Path]:
    # A missing directory is an empty icon set, not an error
    if not directory.is_dir():
        return []
    # Hidden files and directories (e.g. AppleDouble "._x.svg" sidecars) are not icons
    return sorted(
        p
        for p in directory.rglob("*.svg")
        if p.is_file() and not any(part.startswith(".") for part in p.relative_to(directory).parts)
    )


async def _render_icon(config: IconSetConfig, file_path: Path) -> str:
    svg_content = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
    icon_name = icon_name_from_path(file_path, config.directory)
    return await asyncio.to_thread(generate_utility, config, icon_name, svg_content)


async def build_icon_set(config: IconSetConfig, dist_dir: Path) -> int:
    """Write <dist_dir>/<name>.css for one icon set and return its icon count.

    Empty sets are skipped without writing anything.
    """
    svg_files = collect_svg_files(config.directory)
    if not svg_files:
        logging.info("No icons found for %s, skipping...", config.name)
        return 0

    utilities = await asyncio.gather(*(_render_icon(config, p) for p in svg_files))

    output = "\n".join(utilities)
    if not config.colored:
        output = f'@import "./{UTILITIES_FILE}";\n\n' + output
    output_file = dist_dir / f"{config.name}.css"
    await asyncio.to_thread(output_file.write_text, output, encoding="utf-8")

    logging.info("Generated %s with %d icons", output_file, len(svg_files))
    return len(svg_files)


async def write_index_css(dist_dir: Path, icon_set_names: list[str]) -> None:
    output = "\n".join(f'@import "./{name}.css";' for name in icon_set_names) + "\n"
    output_file = dist_dir / INDEX_FILE
    await asyncio.to_thread(output_file.write_text, output, encoding="utf-8")
    logging.info("Generated %s", output_file)


async def build_all(icon_sets: list[IconSetConfig], dist_dir: Path) -> BuildSummary:
    """Rebuild dist_dir from scratch.

    The directory is wiped before anything is written; a failure part way
    through leaves whatever was produced up to that point.
    """
    if dist_dir.exists():
        shutil.rmtree(dist_dir)
    dist_dir.mkdir(parents=True, exist_ok=True)

    utilities_file = dist_dir / UTILITIES_FILE
    await asyncio.to_thread(utilities_file.write_text, generate_utilities_css(), encoding="utf-8")
    logging.info("Generated %s", utilities_file)

    summary = BuildSummary()
    for config in icon_sets:
        count = await build_icon_set(config, dist_dir)
        if count > 0:
            summary.built_sets.append(config.name)
            summary.total_icons += count

    await write_index_css(dist_dir, summary.built_sets)

    logging.info("%s", summary.text())
    return summary
