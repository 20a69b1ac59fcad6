"""
PFL Academy slide deck tools.

- generate: build state-customized HTML decks from content JSON
- html2json: convert legacy HTML decks to content JSON
- validate: check content JSON before generation
"""

from pfl_slides.interpolate import CALCULATED_FIELDS, Interpolator, interpolate
from pfl_slides.layouts import LAYOUT_RENDERERS, render_layout, render_slide
from pfl_slides.mapping import ChapterMapping, parse_chapter_mapping
from pfl_slides.validate import ValidationReport, validate_content, validate_file

__version__ = "1.0.0"

__all__ = [
    "CALCULATED_FIELDS", "Interpolator", "interpolate",
    "LAYOUT_RENDERERS", "render_layout", "render_slide",
    "ChapterMapping", "parse_chapter_mapping",
    "ValidationReport", "validate_content", "validate_file",
]
