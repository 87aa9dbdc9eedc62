"""HTML theme presets for rendered documents.

Maps semantic element names (heading_1, paragraph, code_block, ...) to the
CSS classes and extra attributes the HTML renderer puts on each element.
Presets: ``default`` (light blog styling), ``dark`` and ``plain`` (no
classes at all, for feeds and e-mail).
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class ElementStyle:
    """Presentation of one element kind."""

    name: str
    css_class: str = ""
    attrs: dict[str, str] = field(default_factory=dict)

    def derive(self, **overrides) -> ElementStyle:
        """Return a copy with selected fields overridden."""
        clone = deepcopy(self)
        for k, v in overrides.items():
            if hasattr(clone, k):
                setattr(clone, k, v)
        return clone


ELEMENT_NAMES = (
    "paragraph",
    "heading_1", "heading_2", "heading_3", "heading_4", "heading_5", "heading_6",
    "bullet_list", "ordered_list", "list_item",
    "blockquote",
    "code_block", "inline_code",
    "link", "image", "horizontal_rule",
    "table", "table_row", "table_header", "table_cell",
)


# ---------------------------------------------------------------------------
# Preset definitions
# ---------------------------------------------------------------------------

def _build_default_styles() -> dict[str, ElementStyle]:
    """Build the **default** preset styles."""
    heading_base = "font-bold mb-3 mt-6 scroll-mt-20"
    heading_sizes = {
        1: "text-4xl md:text-5xl",
        2: "text-3xl md:text-4xl",
        3: "text-2xl md:text-3xl",
        4: "text-xl md:text-2xl",
        5: "text-lg md:text-xl",
        6: "text-base md:text-lg",
    }

    styles: dict[str, ElementStyle] = {}
    for level in range(1, 7):
        styles[f"heading_{level}"] = ElementStyle(
            name=f"heading_{level}",
            css_class=f"{heading_base} {heading_sizes[level]}",
        )

    styles["paragraph"] = ElementStyle("paragraph", "mb-4 leading-relaxed")
    styles["bullet_list"] = ElementStyle("bullet_list", "list-disc list-inside mb-4 space-y-2")
    styles["ordered_list"] = ElementStyle("ordered_list", "list-decimal list-inside mb-4 space-y-2")
    styles["list_item"] = ElementStyle("list_item", "ml-4")
    styles["blockquote"] = ElementStyle(
        "blockquote",
        "border-l-4 border-cyan-400 pl-4 py-2 my-4 italic text-gray-600 bg-gray-50 rounded-r",
    )
    styles["code_block"] = ElementStyle(
        "code_block",
        "bg-gray-900 rounded-lg p-4 my-4 overflow-x-auto text-sm font-mono text-gray-200",
    )
    styles["inline_code"] = ElementStyle(
        "inline_code",
        "text-pink-400 bg-gray-800 px-1.5 py-0.5 rounded text-sm font-mono",
    )
    styles["link"] = ElementStyle("link", "text-cyan-500 hover:text-cyan-400 underline transition-colors")
    styles["image"] = ElementStyle(
        "image",
        "max-w-full h-auto rounded-lg my-4 shadow-md",
        attrs={"loading": "lazy"},
    )
    styles["horizontal_rule"] = ElementStyle("horizontal_rule", "my-6 border-t border-gray-300")
    styles["table"] = ElementStyle("table", "min-w-full")
    styles["table_row"] = ElementStyle("table_row", "border-b border-gray-300 hover:bg-gray-50")
    styles["table_header"] = ElementStyle("table_header", "px-4 py-2 text-left bg-gray-100 font-semibold")
    styles["table_cell"] = ElementStyle("table_cell", "px-4 py-2 border border-gray-300")
    return styles


def _build_dark_styles() -> dict[str, ElementStyle]:
    """Build the **dark** preset: default layout with dark-mode colours."""
    styles = _build_default_styles()
    for level in range(1, 7):
        key = f"heading_{level}"
        styles[key] = styles[key].derive(css_class=f"{styles[key].css_class} text-cyan-200")
    styles["paragraph"] = styles["paragraph"].derive(css_class="mb-4 leading-relaxed text-gray-300")
    styles["blockquote"] = styles["blockquote"].derive(
        css_class="border-l-4 border-cyan-400 pl-4 py-2 my-4 italic text-gray-400 bg-gray-800/50 rounded-r",
    )
    styles["code_block"] = styles["code_block"].derive(
        css_class="bg-gray-950 rounded-lg p-4 my-4 overflow-x-auto border border-cyan-400/20 "
                  "text-sm font-mono text-gray-200",
    )
    styles["horizontal_rule"] = styles["horizontal_rule"].derive(css_class="my-6 border-t border-cyan-400/30")
    styles["table_row"] = styles["table_row"].derive(
        css_class="border-b border-cyan-400/20 hover:bg-gray-800/50",
    )
    styles["table_header"] = styles["table_header"].derive(
        css_class="px-4 py-2 text-left bg-gray-800 font-semibold text-cyan-200",
    )
    styles["table_cell"] = styles["table_cell"].derive(
        css_class="px-4 py-2 border border-cyan-400/20 text-gray-300",
    )
    return styles


def _build_plain_styles() -> dict[str, ElementStyle]:
    """Build the **plain** preset: semantic markup only."""
    styles = {name: ElementStyle(name) for name in ELEMENT_NAMES}
    styles["image"] = ElementStyle("image", attrs={"loading": "lazy"})
    return styles


_PRESET_BUILDERS = {
    "default": _build_default_styles,
    "dark": _build_dark_styles,
    "plain": _build_plain_styles,
}


# ---------------------------------------------------------------------------
# ThemeManager
# ---------------------------------------------------------------------------

class ThemeManager:
    """Manages HTML theme presets and provides element styles.

    Usage::

        tm = ThemeManager("dark")
        tm.get_style("heading_2").css_class
    """

    PRESETS = list(_PRESET_BUILDERS.keys())

    def __init__(self, preset: str = "default", *, external_links: bool = True) -> None:
        if preset not in _PRESET_BUILDERS:
            raise ValueError(
                f"Unknown preset {preset!r}. Choose from: {', '.join(_PRESET_BUILDERS)}"
            )
        self.preset = preset
        self.external_links = external_links
        self._styles: dict[str, ElementStyle] = _PRESET_BUILDERS[preset]()

    def get_style(self, name: str) -> ElementStyle:
        """Get style by element name; unknown names fall back to ``paragraph``."""
        return self._styles.get(name, self._styles["paragraph"])

    def get_heading_style(self, level: int) -> ElementStyle:
        """Return the :class:`ElementStyle` for heading level *1--6*."""
        level = max(1, min(6, level))
        return self.get_style(f"heading_{level}")

    def list_style_names(self) -> list[str]:
        """Return all element names defined by this preset."""
        return sorted(self._styles.keys())
