"""
Chapter mapping: L-chapter id -> state chapter number.

Each state has a markdown data file with table rows such as::

    | L-03 | 1.3 | Income and Taxes |

The file is located by trying the lower-case, capitalized and upper-case
state name in that order.
"""

import warnings
from pathlib import Path
from typing import NamedTuple

from pfl_slides.config import MAPPING_SUFFIX
from pfl_slides.errors import InvalidDocumentError, MissingFileError

UNKNOWN_CHAPTER_TITLE = "Unknown Chapter"


class ChapterMapping(NamedTuple):
    state_chapter: str
    title: str


def parse_chapter_mapping(markdown: str, chapter_id: str) -> ChapterMapping:
    """Find chapter_id in the markdown table rows of a mapping document.

    Never raises: an id missing from the table warns and falls back to the
    numeric part of the id so generation can still proceed.
    """
    for line in markdown.splitlines():
        if not line.strip().startswith("|"):
            continue
        cells = [cell.strip() for cell in line.split("|")]
        cells = [cell for cell in cells if cell]
        if not cells or cells[0] != chapter_id:
            continue
        if len(cells) < 2:
            continue
        title = cells[2] if len(cells) > 2 else UNKNOWN_CHAPTER_TITLE
        return ChapterMapping(state_chapter=cells[1], title=title)

    warnings.warn(f"No mapping found for {chapter_id}, using fallback", stacklevel=2)
    fallback = chapter_id[2:] if chapter_id.startswith("L-") else chapter_id
    return ChapterMapping(state_chapter=fallback, title=UNKNOWN_CHAPTER_TITLE)


def mapping_candidates(mapping_dir: Path, state: str) -> list[Path]:
    """Candidate mapping file paths for state, in lookup order."""
    names = [state, state[:1].upper() + state[1:], state.upper()]
    candidates: list[Path] = []
    for name in names:
        path = Path(mapping_dir) / f"{name}{MAPPING_SUFFIX}"
        if path not in candidates:
            candidates.append(path)
    return candidates


def find_mapping_file(mapping_dir: Path, state: str) -> Path:
    candidates = mapping_candidates(mapping_dir, state)
    for path in candidates:
        if path.is_file():
            return path
    raise MissingFileError(f"Chapter mapping file for {state}", candidates[0], tried=candidates)


def load_chapter_mapping(mapping_dir: Path, state: str) -> str:
    """Read the raw mapping document for state."""
    path = find_mapping_file(mapping_dir, state)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidDocumentError("chapter mapping", path, str(e)) from e


def resolve_chapter(mapping_dir: Path, state: str, chapter_id: str) -> ChapterMapping:
    return parse_chapter_mapping(load_chapter_mapping(mapping_dir, state), chapter_id)
