from __future__ import annotations

import re
from pathlib import Path
from xml.dom import minidom

from scour import scour

from .config import IconSetConfig

DATA_URI_PREFIX = "data:image/svg+xml;charset=UTF-8,"

_WHITESPACE = re.compile(r"\s+")
_PLAIN_LENGTH = re.compile(r"^\s*(\d*\.?\d+)(?:px)?\s*$")

# Characters that would terminate or corrupt a double-quoted CSS url("...") token.
_CSS_URL_ESCAPES = (
    ('"', "'"),
    ("#", "%23"),
    ("<", "%3c"),
    (">", "%3e"),
)


def _scour_options():
    options = scour.sanitizeOptions()
    options.strip_xml_prolog = True
    options.strip_comments = True
    options.remove_descriptive_elements = True
    options.remove_metadata = True
    options.strip_ids = True
    options.shorten_ids = True
    options.strip_xml_space_attribute = True
    options.keep_editor_data = False
    options.indent_type = "none"
    options.newlines = False
    return options


def _remove_dimensions(svg_text: str) -> str:
    """Drop width/height from the root element so the icon scales with CSS.

    A viewBox is synthesized from plain numeric dimensions when the root has none.
    """
    doc = minidom.parseString(svg_text)
    root = doc.documentElement
    width = root.getAttribute("width")
    height = root.getAttribute("height")
    if not root.getAttribute("viewBox"):
        w = _PLAIN_LENGTH.match(width)
        h = _PLAIN_LENGTH.match(height)
        if w and h:
            root.setAttribute("viewBox", f"0 0 {w.group(1)} {h.group(1)}")
    for attr in ("width", "height"):
        if root.hasAttribute(attr):
            root.removeAttribute(attr)
    return root.toxml()


def optimize_svg(svg_text: str) -> str:
    """Minify SVG markup. Raises ExpatError if it cannot be parsed."""
    optimized = scour.scourString(svg_text, _scour_options())
    return _remove_dimensions(optimized)


def escape_for_css_url(text: str) -> str:
    """Minimal escaping for a double-quoted CSS url() value.

    Only the four characters that break the token are rewritten; everything
    else passes through unchanged. Applying it twice is a no-op.
    """
    out = _WHITESPACE.sub(" ", text).strip()
    for char, replacement in _CSS_URL_ESCAPES:
        out = out.replace(char, replacement)
    return out


def svg_to_data_uri(svg_text: str) -> str:
    return DATA_URI_PREFIX + escape_for_css_url(optimize_svg(svg_text))


def icon_name_from_path(file_path: Path, base_dir: Path) -> str:
    relative = file_path.relative_to(base_dir)
    parts = list(relative.parts)
    if parts[-1].endswith(".svg"):
        parts[-1] = parts[-1][: -len(".svg")]
    return "-".join(parts).lower()


def class_name(config: IconSetConfig, icon_name: str) -> str:
    parts = [config.prefix, icon_name, config.suffix]
    return "-".join(p for p in parts if p)
