#!/usr/bin/env python3
"""
html2json.py - Convert legacy hand-authored HTML slide decks to content JSON.

This tool parses the original PFL Academy HTML decks and writes the chapter
content JSON consumed by the deck generator (slide-content/L-XX.json).

Usage:
    pfl-html2json                    # convert every deck not in the skip list
    pfl-html2json --chapter=L-02     # convert a single chapter
    pfl-html2json --test             # same as --chapter=L-02

Supports the legacy slide types (div.slide with slide-title, slide-hook,
slide-discussion, slide-closing, slide-content) and these content layouts:
- objectives-expanded, vocab-container, balanced-layout, comparison-grid
- scenario-layout, takeaway-grid, activity-layout, check-grid
- concept-full, priority-list
- anything else is captured as generic paragraphs and lists
"""

import argparse
import json
import re
import sys
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup, Tag

from pfl_slides.config import SKIP_EXISTING, TEST_CHAPTER, DeckPaths
from pfl_slides.interpolate import STATE_TOKEN_RE
from pfl_slides.layouts import (
    DEFAULT_COPYRIGHT,
    DEFAULT_DISCUSSION_BADGE,
    DEFAULT_HOOK_LABEL,
    DEFAULT_TAGLINE,
    DEFAULT_WEBSITE,
)

# ── Known state variables (matched even without braces) ─────────────────────
STATE_VARIABLES = (
    "STATE_NAME", "STATE_GRANT_PROGRAM", "STATE_TUITION_PUBLIC", "STATE_TUITION_COMMUNITY",
    "MIN_WAGE", "INCOME_TAX_RATE", "SALES_TAX", "LOCAL_SALES_TAX_MAX", "COMBINED_SALES_TAX_MAX",
    "PROPERTY_TAX_COUNTY_RATE", "ASSESSMENT_PERCENTAGE", "HOMESTEAD_EXEMPTION",
    "MEDIAN_HOME_PRICE", "MEDIAN_RENT", "AVG_MORTGAGE_RATE_30YR",
    "REGISTRATION_INITIAL", "REGISTRATION_ANNUAL", "GAS_PRICE_CURRENT", "INSURANCE_AVG_TEEN",
    "AVG_AUTO_LOAN_RATE_NEW", "AVG_AUTO_LOAN_RATE_USED",
    "UNEMPLOYMENT_RATE", "MAJOR_INDUSTRIES", "MAJOR_CITY", "MAJOR_CITY_1", "MAJOR_CITY_2",
    "AVG_MONTHLY_FEE", "AVG_OVERDRAFT_FEE", "LOCAL_CREDIT_UNION_NAME",
    "DMV_URL", "TAX_AUTHORITY_URL", "LABOR_DEPARTMENT_URL", "CONSUMER_PROTECTION_URL",
)

# ── Icon glyphs recognised at the start of labels ────────────────────────────
HIGHLIGHT_ICONS = ("💡", "🎯", "📅", "🔄", "💰", "📊")
HIGHLIGHT_SKIP_ICONS = ("💡", "🎯", "📅")  # paragraphs holding these belong to a highlight box
COMPARISON_ICONS = ("🎁", "💳", "📋", "🚀", "✓", "!")
ACTIVITY_ICONS = ("📋", "📝", "✏", "📊")

DEFAULT_HIGHLIGHT_ICON = "💡"
DEFAULT_SCENARIO_ICON = "👤"
DEFAULT_ACTIVITY_ICON = "📋"

# Checked in this order; the first container found inside .slide-body wins
LAYOUT_CLASSES = (
    "objectives-expanded",
    "vocab-container",
    "balanced-layout",
    "comparison-grid",
    "scenario-layout",
    "takeaway-grid",
    "activity-layout",
    "check-grid",
    "concept-full",
    "priority-list",
)

CHAPTER_RE = re.compile(r"L-(\d+)")
FILENAME_CHAPTER_RE = re.compile(r"^(L-\d+)")
FONT_SIZE_RE = re.compile(r"font-size\s*:\s*(\d+)", re.IGNORECASE)
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


# ── Text helpers ─────────────────────────────────────────────────────────────


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    if not text:
        return ""
    return " ".join(text.split())


def _replace_br_tags(element: Tag):
    """Replace all <br> tags with newline characters BEFORE text extraction."""
    for br in element.find_all("br"):
        br.replace_with("\n")


def get_text(element: Optional[Tag]) -> str:
    """Extract the plain text of an element, handling None and <br> tags."""
    if element is None:
        return ""
    # Work on a copy so we don't mutate the original soup
    el_copy = deepcopy(element)
    _replace_br_tags(el_copy)
    return clean_text(el_copy.get_text())


def get_inner_html(element: Optional[Tag]) -> str:
    """Serialize an element's children, keeping inline markup like <strong>."""
    if element is None:
        return ""
    return clean_text(element.decode_contents())


def has_class(element: Optional[Tag], name: str) -> bool:
    return element is not None and name in element.get("class", [])


def parse_leading_int(text: str) -> Optional[int]:
    m = LEADING_INT_RE.match(text or "")
    return int(m.group(1)) if m else None


def split_icon(text: str, icons: tuple[str, ...]) -> tuple[Optional[str], str]:
    """Split a leading icon glyph (plus any variation selector) from text."""
    for icon in icons:
        if text.startswith(icon):
            rest = text[len(icon):]
            if rest.startswith("\ufe0f"):
                icon += "\ufe0f"
                rest = rest[1:]
            return icon, rest.lstrip()
    return None, text


def detect_state_variables(document) -> list[str]:
    """Known variable names and {{UPPER_SNAKE}} tokens found anywhere in document."""
    serialized = json.dumps(document, ensure_ascii=False)
    found = [name for name in STATE_VARIABLES if name in serialized]
    for name in STATE_TOKEN_RE.findall(serialized):
        if name not in found:
            found.append(name)
    return found


def _paragraphs_outside(container: Tag, excluded_class: str) -> list[Tag]:
    return [p for p in container.find_all("p") if not p.find_parent(class_=excluded_class)]


# ── Main converter class ─────────────────────────────────────────────────────


class HTMLToJSONConverter:
    """Converts a legacy HTML slide deck to a content document."""

    def __init__(self, html_content: str):
        self.soup = BeautifulSoup(html_content, "lxml")

        # Track warnings
        self.warnings: list[str] = []

    # ── Slide extraction ─────────────────────────────────────────────────────

    def extract_slides(self) -> list[Tag]:
        """Every element carrying the ``slide`` class, in document order."""
        return self.soup.find_all(class_="slide")

    def chapter_id(self) -> str:
        title = get_text(self.soup.find("title"))
        m = CHAPTER_RE.search(title)
        if not m:
            self.warnings.append("No L-chapter id in <title>, using L-XX")
            return "L-XX"
        return f"L-{m.group(1).zfill(2)}"

    # ── Slide type parsers ───────────────────────────────────────────────────

    def parse_title_slide(self, slide_el: Tag) -> dict:
        h1 = slide_el.find("h1")
        subtitle = slide_el.find(class_="subtitle")

        # Title size from the inline font-size, when the deck set one
        title_size = "large"
        if h1 is not None:
            m = FONT_SIZE_RE.search(h1.get("style", ""))
            if m:
                size = int(m.group(1))
                if size <= 64:
                    title_size = "small"
                elif size <= 80:
                    title_size = "medium"

        return {
            "type": "title",
            "content": {
                "title": get_text(h1),
                "titleSize": title_size,
                "subtitle": get_text(subtitle),
            },
        }

    def parse_hook_slide(self, slide_el: Tag) -> dict:
        return {
            "type": "hook",
            "content": {
                "label": get_text(slide_el.find(class_="label")) or DEFAULT_HOOK_LABEL,
                "question": get_inner_html(slide_el.find(class_="question")),
            },
        }

    def parse_discussion_slide(self, slide_el: Tag) -> dict:
        style = slide_el.get("style", "")
        variant = "purple" if "primary" in style or "6D29D8" in style else "teal"
        return {
            "type": "discussion",
            "variant": variant,
            "content": {
                "badge": get_text(slide_el.find(class_="badge")) or DEFAULT_DISCUSSION_BADGE,
                "question": get_inner_html(slide_el.find(class_="question")),
            },
        }

    def parse_closing_slide(self, slide_el: Tag) -> dict:
        return {
            "type": "closing",
            "content": {
                "tagline": get_text(slide_el.find(class_="tagline")) or DEFAULT_TAGLINE,
                "website": get_text(slide_el.find(class_="website")) or DEFAULT_WEBSITE,
                "copyright": get_text(slide_el.find(class_="copyright")) or DEFAULT_COPYRIGHT,
            },
        }

    def parse_content_slide(self, slide_el: Tag) -> dict:
        header = slide_el.find(class_="slide-header")
        body = slide_el.find(class_="slide-body")
        header_title = (header.find("h2") or header.find("h1")) if header is not None else None

        layout = self.detect_layout(body)
        return {
            "type": "content",
            "headerColor": self.header_color(header),
            "content": {
                "headerTitle": get_text(header_title),
                "layout": layout,
                "layoutData": self.extract_layout_data(body, layout),
            },
        }

    @staticmethod
    def header_color(header: Optional[Tag]) -> str:
        if header is None:
            return "purple"
        classes = " ".join(header.get("class", []))
        if "teal" in classes:
            return "teal"
        if "blue" in classes:
            return "blue"
        return "purple"

    # ── Layout dispatch ──────────────────────────────────────────────────────

    @staticmethod
    def detect_layout(body: Optional[Tag]) -> str:
        if body is None:
            return "generic"
        for layout in LAYOUT_CLASSES:
            if body.find(class_=layout) is not None:
                return layout
        return "generic"

    def extract_layout_data(self, body: Optional[Tag], layout: str) -> dict:
        if body is None:
            return {}
        extractor = self.LAYOUT_EXTRACTORS.get(layout, HTMLToJSONConverter._extract_generic)
        return extractor(self, body)

    # ── Objectives / vocab ───────────────────────────────────────────────────

    def _extract_objectives(self, body: Tag) -> dict:
        objectives = []
        for index, card in enumerate(body.find_all(class_="objective-card"), start=1):
            number = parse_leading_int(get_text(card.find(class_="number")))
            objectives.append(
                {
                    "number": number or index,
                    "verb": get_text(card.find("h3")),
                    "description": get_text(card.find("p")),
                }
            )
        return {"objectives": objectives}

    def _extract_vocab(self, body: Tag) -> dict:
        terms = []
        for row in body.find_all(class_="vocab-row"):
            terms.append(
                {
                    "term": get_text(row.select_one(".vocab-term-box .term")),
                    "definition": get_text(row.select_one(".vocab-def-box p")),
                    "example": get_text(row.select_one(".vocab-example-box p")),
                }
            )
        return {"terms": terms}

    # ── Balanced (content panel + stats panel) ───────────────────────────────

    def _extract_balanced(self, body: Tag) -> dict:
        layout = body.find(class_="balanced-layout")
        if layout is None:
            return {}

        left_panel = {"title": "", "paragraphs": [], "highlightBox": None}
        content_panel = layout.find(class_="content-panel")
        if content_panel is not None:
            left_panel["title"] = get_text(content_panel.find("h3"))
            for p in _paragraphs_outside(content_panel, "highlight-box"):
                text = get_inner_html(p)
                if text and not any(icon in text for icon in HIGHLIGHT_SKIP_ICONS):
                    left_panel["paragraphs"].append(text)

            highlight = content_panel.find(class_="highlight-box")
            if highlight is not None:
                icon, text = split_icon(get_inner_html(highlight.find("p")), HIGHLIGHT_ICONS)
                left_panel["highlightBox"] = {
                    "icon": icon or DEFAULT_HIGHLIGHT_ICON,
                    "text": text,
                }

        right_panel = {"stats": [], "infoCard": None}
        stats_panel = layout.find(class_="stats-panel")
        if stats_panel is not None:
            for card in stats_panel.find_all(class_="stat-card"):
                color = next(
                    (c for c in ("purple", "green", "rose") if has_class(card, c)), "teal"
                )
                right_panel["stats"].append(
                    {
                        "value": get_text(card.find(class_="number")),
                        "label": get_text(card.find(class_="label")),
                        "color": color,
                    }
                )

            info_card = stats_panel.find(class_="info-card")
            if info_card is not None:
                color = next((c for c in ("blue", "green") if has_class(info_card, c)), "amber")
                right_panel["infoCard"] = {
                    "title": get_text(info_card.find("h4")),
                    "color": color,
                    "items": [get_text(li) for li in info_card.find_all("li")],
                }

            priority_list = stats_panel.find(class_="priority-list")
            if priority_list is not None:
                right_panel["priorityList"] = self._extract_priority_items(priority_list)

        return {"leftPanel": left_panel, "rightPanel": right_panel}

    def _extract_priority_items(self, priority_list: Tag) -> list[dict]:
        items = []
        for index, item in enumerate(priority_list.find_all(class_="priority-item"), start=1):
            rank = item.find(class_="rank")
            rank_class = next(
                (c for c in ("second", "third", "fourth") if has_class(rank, c)), "first"
            )
            items.append(
                {
                    "rank": index,
                    "rankClass": rank_class,
                    "title": get_text(item.find("h4")),
                    "description": get_text(item.find("p")),
                }
            )
        return items

    # ── Comparison / scenario ────────────────────────────────────────────────

    @staticmethod
    def _extract_column(column: Optional[Tag]) -> dict:
        if column is None:
            return {"icon": "", "title": "", "items": []}
        icon, title = split_icon(get_text(column.find("h3")), COMPARISON_ICONS)
        return {
            "icon": icon or "",
            "title": title,
            "items": [get_text(li) for li in column.find_all("li")],
        }

    def _extract_comparison(self, body: Tag) -> dict:
        grid = body.find(class_="comparison-grid")
        if grid is None:
            return {}
        return {
            "leftColumn": self._extract_column(grid.select_one(".compare-column.left")),
            "rightColumn": self._extract_column(grid.select_one(".compare-column.right")),
        }

    def _extract_scenario(self, body: Tag) -> dict:
        layout = body.find(class_="scenario-layout")
        if layout is None:
            return {}

        scenario = {"icon": "", "name": "", "paragraphs": []}
        card = layout.find(class_="scenario-card")
        if card is not None:
            name_div = card.find(class_="name")
            icon_div = name_div.find(class_="icon") if name_div is not None else None
            scenario["icon"] = get_text(icon_div) or DEFAULT_SCENARIO_ICON
            scenario["name"] = get_text(name_div).replace(scenario["icon"], "", 1).strip()
            scenario["paragraphs"] = [get_inner_html(p) for p in card.find_all("p")]

        outcomes = []
        outcomes_div = layout.find(class_="scenario-outcomes")
        if outcomes_div is not None:
            for box in outcomes_div.find_all(class_="outcome-box"):
                kind = next((c for c in ("before", "after") if has_class(box, c)), "neutral")
                outcomes.append(
                    {
                        "type": kind,
                        "label": get_text(box.find(class_="label")),
                        "value": get_text(box.find(class_="value")),
                        "detail": get_text(box.find(class_="detail")),
                    }
                )

        return {"scenario": scenario, "outcomes": outcomes}

    # ── Takeaways / activity / check ─────────────────────────────────────────

    def _extract_takeaways(self, body: Tag) -> dict:
        takeaways = []
        for index, item in enumerate(body.find_all(class_="takeaway-item"), start=1):
            number = parse_leading_int(get_text(item.find(class_="number")))
            takeaways.append(
                {
                    "number": number or index,
                    "title": get_text(item.find("h4")),
                    "description": get_text(item.find("p")),
                }
            )
        return {"takeaways": takeaways}

    def _extract_activity(self, body: Tag) -> dict:
        layout = body.find(class_="activity-layout")
        if layout is None:
            return {}

        main = {"icon": DEFAULT_ACTIVITY_ICON, "title": "", "description": ""}
        main_div = layout.find(class_="activity-main")
        if main_div is not None:
            icon, title = split_icon(get_text(main_div.find("h3")), ACTIVITY_ICONS)
            main["icon"] = icon or DEFAULT_ACTIVITY_ICON
            main["title"] = title
            main["description"] = " ".join(get_inner_html(p) for p in main_div.find_all("p"))

        steps = []
        steps_div = layout.find(class_="activity-steps")
        if steps_div is not None:
            steps = [get_text(step.find("p")) for step in steps_div.find_all(class_="activity-step")]

        return {"main": main, "steps": steps}

    def _extract_check(self, body: Tag) -> dict:
        questions = [
            {"number": index, "question": get_text(item.find("p"))}
            for index, item in enumerate(body.find_all(class_="check-item"), start=1)
        ]
        return {"questions": questions}

    # ── Concept / priority / generic ─────────────────────────────────────────

    def _extract_concept(self, body: Tag) -> dict:
        concept = body.find(class_="concept-full")
        if concept is None:
            return {}

        result = {
            "title": get_text(concept.find("h3")),
            "paragraphs": [get_inner_html(p) for p in _paragraphs_outside(concept, "key-point")],
            "bulletPoints": [get_inner_html(li) for li in concept.find_all("li")],
        }
        key_point = concept.find(class_="key-point")
        if key_point is not None:
            result["keyPoint"] = {"text": get_inner_html(key_point.find("p"))}
        return result

    def _extract_priority(self, body: Tag) -> dict:
        priority_list = body.find(class_="priority-list")
        if priority_list is None:
            return {}
        return {"items": self._extract_priority_items(priority_list)}

    def _extract_generic(self, body: Tag) -> dict:
        """Fallback: keep every paragraph and list so nothing is lost."""
        return {
            "paragraphs": [get_inner_html(p) for p in body.find_all("p")],
            "lists": [
                [get_inner_html(li) for li in lst.find_all("li")]
                for lst in body.find_all(["ul", "ol"])
            ],
        }

    LAYOUT_EXTRACTORS = {
        "objectives-expanded": _extract_objectives,
        "vocab-container": _extract_vocab,
        "balanced-layout": _extract_balanced,
        "comparison-grid": _extract_comparison,
        "scenario-layout": _extract_scenario,
        "takeaway-grid": _extract_takeaways,
        "activity-layout": _extract_activity,
        "check-grid": _extract_check,
        "concept-full": _extract_concept,
        "priority-list": _extract_priority,
    }

    SLIDE_PARSERS = {
        "slide-title": parse_title_slide,
        "slide-hook": parse_hook_slide,
        "slide-discussion": parse_discussion_slide,
        "slide-closing": parse_closing_slide,
        "slide-content": parse_content_slide,
    }

    # ── Convert ──────────────────────────────────────────────────────────────

    def parse_slide(self, slide_el: Tag, slide_num: int) -> dict:
        classes = slide_el.get("class", [])
        parser = next(
            (p for cls, p in self.SLIDE_PARSERS.items() if cls in classes),
            None,
        )
        if parser is None:
            self.warnings.append(f"Slide {slide_num}: unknown slide type, parsed as content")
            parser = HTMLToJSONConverter.parse_content_slide
        return {"number": slide_num, **parser(self, slide_el)}

    def convert(self) -> dict:
        """Convert the HTML deck to a content document."""
        title_slide = self.soup.find(class_="slide-title")
        main_title = get_text(title_slide.find("h1")) if title_slide is not None else ""
        subtitle = get_text(title_slide.find(class_="subtitle")) if title_slide is not None else ""

        slides = [
            self.parse_slide(slide_el, i + 1) for i, slide_el in enumerate(self.extract_slides())
        ]
        if not slides:
            self.warnings.append("No slides found. Check for elements with class='slide'.")

        document = {
            "metadata": {
                "lChapter": self.chapter_id(),
                "title": main_title,
                "subtitle": subtitle,
                "totalSlides": len(slides),
                "hasStateVariables": False,
                "stateVariablesUsed": [],
            },
            "slides": slides,
        }

        state_vars = detect_state_variables(document)
        document["metadata"]["hasStateVariables"] = bool(state_vars)
        document["metadata"]["stateVariablesUsed"] = state_vars
        return document


def convert_file(html_path) -> dict:
    """Convert one deck file, printing any converter warnings to stderr."""
    html_content = Path(html_path).read_text(encoding="utf-8")
    converter = HTMLToJSONConverter(html_content)
    document = converter.convert()

    if converter.warnings:
        print(f"  Warnings ({len(converter.warnings)}):", file=sys.stderr)
        for w in converter.warnings:
            print(f"  - {w}", file=sys.stderr)
    return document


# ── Batch ────────────────────────────────────────────────────────────────────


@dataclass
class BatchResult:
    processed: int = 0
    skipped: int = 0
    errors: int = 0


def process_all(
    source_dir: Path,
    output_dir: Path,
    chapter: Optional[str] = None,
    skip: tuple[str, ...] = SKIP_EXISTING,
) -> BatchResult:
    """Convert every ``L-*.html`` deck in source_dir, one file failing at a time."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    html_files = sorted(Path(source_dir).glob("L-*.html"))
    print(f"Found {len(html_files)} HTML files in {source_dir}")

    result = BatchResult()
    for html_path in html_files:
        m = FILENAME_CHAPTER_RE.match(html_path.name)
        if not m:
            continue
        l_chapter = m.group(1)

        if chapter and chapter != l_chapter:
            continue
        if l_chapter in skip:
            print(f"Skipping {l_chapter} (already exists)")
            result.skipped += 1
            continue

        print(f"\nProcessing: {html_path.name}")
        try:
            document = convert_file(html_path)
            output_path = output_dir / f"{l_chapter}.json"
            output_path.write_text(
                json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except Exception as e:
            print(f"  Error processing {html_path.name}: {e}", file=sys.stderr)
            result.errors += 1
            continue

        print(f"  Extracted {document['metadata']['totalSlides']} slides")
        used = document["metadata"]["stateVariablesUsed"]
        if used:
            print(f"  Found state variables: {', '.join(used)}")
        print(f"  Saved: {output_path.name}")
        result.processed += 1

    return result


# ── CLI entry point ──────────────────────────────────────────────────────────


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert legacy HTML slide decks to content JSON."
    )
    parser.add_argument("--chapter", type=str.upper, help="Convert a single chapter (e.g. L-02)")
    parser.add_argument(
        "--test", action="store_true", help=f"Test mode: convert {TEST_CHAPTER} only"
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Slide generator directory; decks are read from ../slide-decks (default: .)",
    )
    args = parser.parse_args(argv)

    chapter = TEST_CHAPTER if args.test else args.chapter
    paths = DeckPaths.from_root(args.root)
    if not paths.legacy_deck_dir.is_dir():
        print(f"Error: Source directory not found: {paths.legacy_deck_dir}", file=sys.stderr)
        return 1

    result = process_all(paths.legacy_deck_dir, paths.content_dir, chapter=chapter)

    print(f"\n{'=' * 60}")
    print("COMPLETE")
    print(f"  Processed: {result.processed}")
    print(f"  Skipped: {result.skipped}")
    if result.errors:
        print(f"  Errors: {result.errors}")
    print(f"{'=' * 60}")
    return 1 if result.errors else 0


if __name__ == "__main__":
    sys.exit(main())
