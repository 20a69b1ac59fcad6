"""
Placeholder interpolation for slide text.

Replaces ``{{NAME}}`` tokens in three classes, first match wins per token:

1. state variables (``{{MIN_WAGE}}``, ``{{STATE_NAME}}``, ...)
2. calculated fields derived from state variables (``{{CALCULATED_SDI_MONTHLY}}``)
3. chapter metadata (``{{CHAPTER_TITLE}}``, ``{{CHAPTER_SUBTITLE}}``), first
   occurrence only and only when a content document is supplied

Every token is resolved against the original text in a single scan, so text
inserted by a substitution is never scanned again. A state variable whose
value contains ``{{...}}`` keeps those braces literally.
"""

import json
import re
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from pfl_slides.config import DEFAULT_BASE_MONTHLY_INCOME

PLACEHOLDER_RE = re.compile(r"\{\{([^{}]+)\}\}")
STATE_TOKEN_RE = re.compile(r"\{\{([A-Z_]+)\}\}")

METADATA_FIELDS = {
    "CHAPTER_TITLE": "title",
    "CHAPTER_SUBTITLE": "subtitle",
}

_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_rate(value) -> float:
    """Read a percentage rate leniently ("4.75", 4.75, "4.75%"). Anything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    m = _LEADING_NUMBER_RE.match(str(value))
    if not m:
        return 0.0
    return float(m.group(1))


def format_currency(amount: float) -> str:
    return f"${amount:.2f}"


def _rate_field(variable: str) -> Callable[[Mapping, float], str]:
    def calculate(state_vars: Mapping, base_amount: float = DEFAULT_BASE_MONTHLY_INCOME) -> str:
        rate = parse_rate(state_vars.get(variable))
        return format_currency(base_amount * rate / 100)

    calculate.__name__ = f"calculate_{variable.lower()}"
    return calculate


def _total_state_deductions(
    state_vars: Mapping, base_amount: float = DEFAULT_BASE_MONTHLY_INCOME
) -> str:
    total_rate = sum(
        parse_rate(state_vars.get(name))
        for name in ("INCOME_TAX_RATE", "LOCAL_INCOME_TAX", "SDI_RATE")
    )
    return format_currency(base_amount * total_rate / 100)


CALCULATED_FIELDS: Mapping[str, Callable[[Mapping, float], str]] = MappingProxyType(
    {
        "CALCULATED_STATE_TAX_MONTHLY": _rate_field("INCOME_TAX_RATE"),
        "CALCULATED_LOCAL_TAX_MONTHLY": _rate_field("LOCAL_INCOME_TAX"),
        "CALCULATED_SDI_MONTHLY": _rate_field("SDI_RATE"),
        "CALCULATED_TOTAL_STATE_DEDUCTIONS": _total_state_deductions,
    }
)


def display_value(value) -> str:
    """Render a state variable the way it appears on a slide."""
    if value is None:
        return "N/A"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        # JSON numbers like 7.0 read back as floats; show them as 7
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(display_value(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def find_placeholders(text: str) -> set[str]:
    """Return every UPPER_SNAKE_CASE placeholder name used in text."""
    return set(STATE_TOKEN_RE.findall(text))


class Interpolator:
    """Resolves placeholders for one state.

    The calculated-field table and base amount are fixed at construction so a
    single generation run always uses the same formulas.
    """

    def __init__(
        self,
        state_vars: Optional[Mapping] = None,
        calculated_fields: Mapping[str, Callable] = CALCULATED_FIELDS,
        base_amount: float = DEFAULT_BASE_MONTHLY_INCOME,
    ):
        self.state_vars = MappingProxyType(dict(state_vars or {}))
        self.calculated_fields = calculated_fields
        self.base_amount = base_amount

    def calculate(self, field_name: str) -> str:
        return self.calculated_fields[field_name](self.state_vars, self.base_amount)

    def interpolate(self, text, content: Optional[Mapping] = None) -> str:
        if not isinstance(text, str) or not text:
            return ""

        metadata = None
        if isinstance(content, Mapping) and isinstance(content.get("metadata"), Mapping):
            metadata = content["metadata"]
        metadata_done: set[str] = set()

        def resolve(match: re.Match) -> str:
            name = match.group(1)
            if name in self.state_vars:
                return display_value(self.state_vars[name])
            if name in self.calculated_fields:
                return self.calculate(name)
            if metadata is not None and name in METADATA_FIELDS and name not in metadata_done:
                metadata_done.add(name)
                return str(metadata.get(METADATA_FIELDS[name]) or "")
            return match.group(0)

        return PLACEHOLDER_RE.sub(resolve, text)

    __call__ = interpolate


def interpolate(text, state_vars: Optional[Mapping], content: Optional[Mapping] = None) -> str:
    """Interpolate text once with a throwaway Interpolator."""
    return Interpolator(state_vars).interpolate(text, content)
