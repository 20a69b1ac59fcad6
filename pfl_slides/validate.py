#!/usr/bin/env python3
"""
Content JSON Validator

Checks a chapter content file for structural problems without modifying it.
Problems are split into errors (the generator cannot use the file) and
warnings (the file renders, but something is probably wrong).

Usage:
    python -m pfl_slides.validate slide-content/L-03.json
    python -m pfl_slides.validate slide-content/   # checks all .json files
"""

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

from pfl_slides.interpolate import CALCULATED_FIELDS, find_placeholders
from pfl_slides.layouts import LAYOUT_RENDERERS

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class ValidationReport:
    """Validation findings for one content document."""

    path: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_slides: int = 0
    has_state_variables: bool = False

    @property
    def passed(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def _check_metadata(data: dict, report: ValidationReport):
    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        report.errors.append("Missing metadata object")
        return
    if not metadata.get("lChapter"):
        report.errors.append("Missing metadata.lChapter")
    if not metadata.get("title"):
        report.errors.append("Missing metadata.title")
    if "hasStateVariables" not in metadata:
        report.errors.append("Missing metadata.hasStateVariables")
    report.has_state_variables = bool(metadata.get("hasStateVariables"))


def _check_slides(data: dict, report: ValidationReport):
    slides = data.get("slides")
    if not isinstance(slides, list):
        report.errors.append("Missing or invalid slides array")
        return

    report.total_slides = len(slides)
    for index, slide in enumerate(slides, start=1):
        if not isinstance(slide, dict):
            report.warnings.append(f"Slide {index}: not an object")
            continue
        if not slide.get("number"):
            report.warnings.append(f"Slide {index}: missing number")
        elif slide["number"] != index:
            report.warnings.append(
                f"Slide {index}: numbered {slide['number']}, expected {index}"
            )
        if not slide.get("type"):
            report.warnings.append(f"Slide {index}: missing type")
        if slide.get("content") is None:
            report.warnings.append(f"Slide {index}: missing content")
        elif slide.get("type") == "content" and isinstance(slide["content"], dict):
            layout = slide["content"].get("layout")
            if layout and layout not in LAYOUT_RENDERERS:
                report.warnings.append(
                    f"Slide {index}: layout '{layout}' has no renderer, "
                    "raw data will be shown"
                )

    metadata = data.get("metadata")
    if isinstance(metadata, dict) and "totalSlides" in metadata:
        if metadata["totalSlides"] != len(slides):
            report.warnings.append(
                f"metadata.totalSlides is {metadata['totalSlides']} "
                f"but the document has {len(slides)} slides"
            )


def _check_state_variables(data: dict, report: ValidationReport):
    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        return

    found = find_placeholders(json.dumps(data, ensure_ascii=False))
    declared_list = metadata.get("stateVariablesUsed") or []
    declared = {v for v in declared_list if isinstance(v, str)}

    if metadata.get("hasStateVariables") and not found:
        report.warnings.append("hasStateVariables is true but no {{PLACEHOLDERS}} found")
    elif not metadata.get("hasStateVariables") and found - set(CALCULATED_FIELDS):
        report.warnings.append("hasStateVariables is false but {{PLACEHOLDERS}} were found")

    for name in sorted(found - declared - set(CALCULATED_FIELDS)):
        report.warnings.append(
            f"Variable {{{{{name}}}}} used but not declared in stateVariablesUsed"
        )
    for name in sorted(declared - found):
        report.warnings.append(f"Variable {name} declared in stateVariablesUsed but never used")


def validate_content(data, path: str = "<memory>") -> ValidationReport:
    """Validate an already-parsed content document."""
    report = ValidationReport(path=path)
    if not isinstance(data, dict):
        report.errors.append("Document root must be a JSON object")
        return report

    _check_metadata(data, report)
    _check_slides(data, report)
    _check_state_variables(data, report)
    return report


def validate_file(path) -> ValidationReport:
    """Validate a content JSON file. Read and parse failures become errors."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        report = ValidationReport(path=str(path))
        report.errors.append(f"Cannot read file: {e}")
        return report
    except json.JSONDecodeError as e:
        report = ValidationReport(path=str(path))
        report.errors.append(f"Invalid JSON: {e}")
        return report
    return validate_content(data, str(path))


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------


def format_report(report: ValidationReport) -> str:
    """Format a validation report as human-readable text."""
    lines = [f"\n{'=' * 60}", f"Validating: {report.path}", f"{'=' * 60}"]

    if report.passed and not report.warnings:
        lines.append("  PASSED")
        lines.append(f"  Slides: {report.total_slides}")
        lines.append(
            f"  State variables: {'Yes' if report.has_state_variables else 'No'}"
        )
        return "\n".join(lines)

    if report.errors:
        lines.append(f"\n  Errors ({len(report.errors)}):")
        lines.extend(f"    - {err}" for err in report.errors)
    if report.warnings:
        lines.append(f"\n  Warnings ({len(report.warnings)}):")
        lines.extend(f"    - {warn}" for warn in report.warnings)
    lines.append(f"\n  {'PASSED (with warnings)' if report.passed else 'FAILED'}")
    return "\n".join(lines)


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m pfl_slides.validate <file_or_dir>")
        sys.exit(1)

    path = Path(sys.argv[1])
    json_files = sorted(path.glob("*.json")) if path.is_dir() else [path]
    if not json_files:
        print(f"No .json files found at {path}")
        sys.exit(1)

    failed = 0
    for json_file in json_files:
        report = validate_file(json_file)
        print(format_report(report))
        if not report.passed:
            failed += 1

    print(f"\n{'=' * 60}")
    print(f"SUMMARY: {len(json_files) - failed}/{len(json_files)} files passed")
    print(f"{'=' * 60}")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
