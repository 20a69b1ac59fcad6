#!/usr/bin/env python3
"""
generate.py - Build state-customized HTML slide decks.

Combines the master template, a chapter content JSON, the state's variable
JSON and the state's chapter mapping table into one HTML deck per
(state, chapter) pair.

Usage:
    pfl-generate-decks --state=oklahoma --chapter=L-03
    pfl-generate-decks --list-states
    pfl-generate-decks --list-chapters
    pfl-generate-decks --validate slide-content/L-03.json

Output:
    output/{state}/chapter-{X.X}-slides.html
"""

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pfl_slides.config import (
    OUTPUT_NAME_FORMAT,
    SLIDES_PLACEHOLDER,
    STATE_CHAPTER_PLACEHOLDER,
    DeckPaths,
)
from pfl_slides.errors import DeckLoadError, InvalidDocumentError, MissingFileError
from pfl_slides.interpolate import Interpolator
from pfl_slides.layouts import render_slides
from pfl_slides.mapping import ChapterMapping, resolve_chapter
from pfl_slides.validate import format_report, validate_file

# ── Loading ──────────────────────────────────────────────────────────────────


def _read_text(path: Path, what: str) -> str:
    if not path.is_file():
        raise MissingFileError(what, path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidDocumentError(what, path, str(e)) from e


def _read_json(path: Path, what: str):
    text = _read_text(path, what)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidDocumentError(what, path, f"invalid JSON: {e}") from e


def load_template(paths: DeckPaths) -> str:
    return _read_text(paths.template_path, "Slide template")


def load_content(paths: DeckPaths, chapter: str) -> dict:
    """Load the content document for chapter (e.g. ``L-03``)."""
    path = paths.content_path(chapter)
    data = _read_json(path, f"content JSON for {chapter}")
    if not isinstance(data, dict) or not isinstance(data.get("slides"), list):
        raise InvalidDocumentError(
            f"content JSON for {chapter}", path, "expected an object with a slides array"
        )
    return data


def load_state_variables(paths: DeckPaths, state: str) -> dict:
    path = paths.state_path(state)
    data = _read_json(path, f"state data for {state}")
    if not isinstance(data, dict):
        raise InvalidDocumentError(
            f"state data for {state}", path, "expected a JSON object of variables"
        )
    return data


# ── Generation ───────────────────────────────────────────────────────────────


@dataclass
class GenerationResult:
    """What a single deck generation produced."""

    output_path: Path
    mapping: ChapterMapping
    slide_count: int
    size_bytes: int


def build_deck_html(
    template: str, content: dict, state_vars: dict, mapping: ChapterMapping
) -> str:
    """Render every slide into the template and resolve all placeholders."""
    interp = Interpolator(state_vars)
    html = template.replace(SLIDES_PLACEHOLDER, render_slides(content["slides"], interp), 1)
    html = interp.interpolate(html, content)
    return html.replace(STATE_CHAPTER_PLACEHOLDER, mapping.state_chapter, 1)


def generate_deck(state: str, chapter: str, paths: DeckPaths) -> GenerationResult:
    """Generate the deck for one state and chapter.

    Any missing or unparsable input raises DeckLoadError before anything is
    written. A chapter absent from the mapping table only warns.
    """
    template = load_template(paths)
    content = load_content(paths, chapter)
    state_vars = load_state_variables(paths, state)
    mapping = resolve_chapter(paths.mapping_dir, state, chapter)

    html = build_deck_html(template, content, state_vars, mapping)

    state_dir = paths.output_dir / state
    state_dir.mkdir(parents=True, exist_ok=True)
    output_path = state_dir / OUTPUT_NAME_FORMAT.format(state_chapter=mapping.state_chapter)
    output_path.write_text(html, encoding="utf-8")

    return GenerationResult(
        output_path=output_path,
        mapping=mapping,
        slide_count=len(content["slides"]),
        size_bytes=len(html.encode("utf-8")),
    )


# ── Listings ─────────────────────────────────────────────────────────────────


def list_states(paths: DeckPaths) -> list[str]:
    return sorted(p.stem for p in paths.state_data_dir.glob("*.json"))


def list_chapters(paths: DeckPaths) -> list[tuple[str, Optional[str], bool]]:
    """Return (chapter, title, has_state_variables); title is None if unloadable."""
    chapters = []
    for path in sorted(paths.content_dir.glob("*.json")):
        try:
            metadata = load_content(paths, path.stem).get("metadata") or {}
        except DeckLoadError:
            chapters.append((path.stem, None, False))
            continue
        chapters.append(
            (path.stem, metadata.get("title", ""), bool(metadata.get("hasStateVariables")))
        )
    return chapters


def _print_states(paths: DeckPaths) -> int:
    if not paths.state_data_dir.is_dir():
        print(f"Error: State directory not found: {paths.state_data_dir}", file=sys.stderr)
        return 1
    states = list_states(paths)
    print("\nAvailable States:\n")
    for state in states:
        print(f"   - {state}")
    print(f"\n   Total: {len(states)} states\n")
    return 0


def _print_chapters(paths: DeckPaths) -> int:
    if not paths.content_dir.is_dir():
        print(f"Error: Content directory not found: {paths.content_dir}", file=sys.stderr)
        return 1
    chapters = list_chapters(paths)
    print("\nAvailable Chapters:\n")
    for chapter, title, has_vars in chapters:
        mark = "x" if has_vars else " "
        label = title if title is not None else "(error loading)"
        print(f"   [{mark}] {chapter:<8} - {label}")
    print(f"\n   Total: {len(chapters)} chapters")
    print("   [x] = Has state variables\n")
    return 0


# ── CLI entry point ──────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate state-customized HTML slide decks.",
        epilog="Output: output/{state}/chapter-{X.X}-slides.html",
    )
    parser.add_argument(
        "--state", type=str.lower, help="State name (lowercase, e.g. oklahoma)"
    )
    parser.add_argument(
        "--chapter", type=str.upper, help="L-chapter ID (e.g. L-01, L-03)"
    )
    parser.add_argument("--list-states", action="store_true", help="List all available states")
    parser.add_argument(
        "--list-chapters", action="store_true", help="List all available chapters"
    )
    parser.add_argument("--validate", metavar="FILE", help="Validate a content JSON file")
    parser.add_argument(
        "--root",
        default=".",
        help="Slide generator directory holding the template and slide-content/ (default: .)",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    paths = DeckPaths.from_root(args.root)

    if args.list_states:
        return _print_states(paths)
    if args.list_chapters:
        return _print_chapters(paths)
    if args.validate:
        report = validate_file(args.validate)
        print(format_report(report))
        return 0 if report.passed else 1

    if not (args.state and args.chapter):
        parser.print_help()
        return 0

    print(f"Generating: {args.chapter} for {args.state}")
    try:
        result = generate_deck(args.state, args.chapter, paths)
    except DeckLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Mapped to state chapter: {result.mapping.state_chapter} ({result.mapping.title})")
    print(f"Output: {result.output_path}")
    print(f"Done! {result.slide_count} slides, {result.size_bytes / 1024:.2f} KB")
    return 0


if __name__ == "__main__":
    sys.exit(main())
