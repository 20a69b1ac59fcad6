"""
Configuration for the slide deck tools.

Directory layout (relative to the slide generator root):

    slide-template.html               master template
    slide-content/L-XX.json           chapter content
    output/{state}/                   generated decks
    ../state-data/states/{state}.json state variables
    ../Simple-Data-Files-Updated/     chapter mapping tables
    ../slide-decks/L-XX*.html         legacy hand-authored decks
"""

from dataclasses import dataclass
from pathlib import Path

# ── Template contract ────────────────────────────────────────────────────────
SLIDES_PLACEHOLDER = "<!-- SLIDES_CONTENT -->"
STATE_CHAPTER_PLACEHOLDER = "{{STATE_CHAPTER}}"

# ── Calculated fields ────────────────────────────────────────────────────────
DEFAULT_BASE_MONTHLY_INCOME = 4000  # assumed gross monthly income

# ── File naming ──────────────────────────────────────────────────────────────
MAPPING_SUFFIX = "-simple-data.md"
OUTPUT_NAME_FORMAT = "chapter-{state_chapter}-slides.html"

# ── Extractor ────────────────────────────────────────────────────────────────
SKIP_EXISTING = ("L-01", "L-03")  # hand-authored JSON already exists
TEST_CHAPTER = "L-02"


@dataclass(frozen=True)
class DeckPaths:
    """Locations of every input and output directory."""

    template_path: Path
    content_dir: Path
    state_data_dir: Path
    mapping_dir: Path
    output_dir: Path
    legacy_deck_dir: Path

    @classmethod
    def from_root(cls, root) -> "DeckPaths":
        root = Path(root).resolve()
        return cls(
            template_path=root / "slide-template.html",
            content_dir=root / "slide-content",
            state_data_dir=root.parent / "state-data" / "states",
            mapping_dir=root.parent / "Simple-Data-Files-Updated",
            output_dir=root / "output",
            legacy_deck_dir=root.parent / "slide-decks",
        )

    def content_path(self, chapter: str) -> Path:
        return self.content_dir / f"{chapter}.json"

    def state_path(self, state: str) -> Path:
        return self.state_data_dir / f"{state}.json"
