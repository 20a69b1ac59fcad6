"""
HTML renderers for slide bodies.

Content slides are dispatched by ``content.layout`` through LAYOUT_RENDERERS.
The ``generic`` layout written by the HTML extractor, and anything the table
does not know, use render_generic, which dumps the raw layout data so a
malformed or partial slide still renders.
Title, hook, discussion and closing slides have their own body renderers in
SLIDE_RENDERERS.

Every user-facing text field goes through the Interpolator. Icons and
numeric labels are inserted as-is.
"""

import json
from typing import Callable, Mapping

from pfl_slides.interpolate import Interpolator

# ── Slide defaults ───────────────────────────────────────────────────────────
DEFAULT_HEADER_COLOR = "purple"
DEFAULT_TITLE_SIZE = "large"
DEFAULT_HOOK_LABEL = "Essential Question"
DEFAULT_DISCUSSION_VARIANT = "teal"
DEFAULT_DISCUSSION_BADGE = "Discussion"
DEFAULT_TAGLINE = "Building Financial Futures, One Lesson at a Time"
DEFAULT_WEBSITE = "www.pflacademy.co"
DEFAULT_COPYRIGHT = "© 2025 PFL Academy. All rights reserved."

LayoutRenderer = Callable[[Mapping, Interpolator], str]


# ── Helpers ──────────────────────────────────────────────────────────────────


def _items(data, key: str) -> list:
    """Return data[key] if it is a list, else an empty list."""
    if not isinstance(data, Mapping):
        return []
    value = data.get(key)
    return value if isinstance(value, list) else []


def _records(data, key: str) -> list:
    return [item for item in _items(data, key) if isinstance(item, Mapping)]


def _record(data, key: str) -> Mapping:
    if not isinstance(data, Mapping):
        return {}
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _raw(value) -> str:
    """Insert icons and numbers without interpolation."""
    return "" if value is None else str(value)


def _text(value):
    """Numbers in a text field are shown as written; other values pass through."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# ── Hand-authored layouts ────────────────────────────────────────────────────


def render_objectives(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="objectives-expanded">\n']
    for obj in _records(data, "objectives"):
        html.append('  <div class="objective-item">\n')
        html.append(f'    <div class="objective-number">{_raw(obj.get("number"))}</div>\n')
        html.append('    <div class="objective-content">\n')
        html.append(f'      <div class="objective-verb">{interp(_text(obj.get("verb")))}</div>\n')
        html.append(
            f'      <div class="objective-description">{interp(_text(obj.get("description")))}</div>\n'
        )
        html.append("    </div>\n")
        html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_vocab(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="vocab-container">\n']
    for term in _records(data, "terms"):
        html.append('  <div class="vocab-card">\n')
        html.append(f'    <div class="vocab-term">{interp(_text(term.get("term")))}</div>\n')
        html.append(f'    <div class="vocab-definition">{interp(_text(term.get("definition")))}</div>\n')
        if term.get("example"):
            html.append(f'    <div class="vocab-example">{interp(_text(term["example"]))}</div>\n')
        html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_comparison(data: Mapping, interp: Interpolator) -> str:
    """Two or more columns of bullet items.

    Accepts ``columns: [{header, items}]`` or the extracted
    ``leftColumn``/``rightColumn: {icon, title, items}`` pair.
    """
    columns = _records(data, "columns")
    if not columns:
        columns = [
            col for col in (_record(data, "leftColumn"), _record(data, "rightColumn")) if col
        ]

    html = ['<div class="comparison-grid">\n']
    for col in columns:
        header = col.get("header") or col.get("title")
        html.append('  <div class="comparison-column">\n')
        html.append('    <div class="comparison-header">')
        if col.get("icon"):
            html.append(f'<span class="comparison-icon">{_raw(col["icon"])}</span> ')
        html.append(f"{interp(_text(header))}</div>\n")
        html.append('    <ul class="comparison-list">\n')
        for item in _items(col, "items"):
            html.append(f"      <li>{interp(_text(item))}</li>\n")
        html.append("    </ul>\n")
        html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_scenario(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="scenario-layout">\n']

    if data.get("title"):
        html.append(f'  <h2>{interp(_text(data["title"]))}</h2>\n')
    if data.get("description"):
        html.append(f'  <p class="scenario-description">{interp(_text(data["description"]))}</p>\n')

    highlight = _record(data, "highlightBox")
    if highlight:
        html.append('  <div class="highlight-box">\n')
        html.append(f'    <span class="highlight-icon">{_raw(highlight.get("icon"))}</span>\n')
        html.append(f'    <span class="highlight-text">{interp(_text(highlight.get("text")))}</span>\n')
        html.append("  </div>\n")

    # Extracted scenarios carry a character card and before/after outcomes
    scenario = _record(data, "scenario")
    if scenario:
        html.append('  <div class="scenario-card">\n')
        html.append(
            f'    <div class="name"><span class="icon">{_raw(scenario.get("icon"))}</span> '
            f'{interp(_text(scenario.get("name")))}</div>\n'
        )
        for paragraph in _items(scenario, "paragraphs"):
            html.append(f"    <p>{interp(_text(paragraph))}</p>\n")
        html.append("  </div>\n")

    outcomes = _records(data, "outcomes")
    if outcomes:
        html.append('  <div class="scenario-outcomes">\n')
        for outcome in outcomes:
            html.append(f'    <div class="outcome-box {_raw(outcome.get("type"))}">\n')
            html.append(f'      <div class="label">{interp(_text(outcome.get("label")))}</div>\n')
            html.append(f'      <div class="value">{interp(_text(outcome.get("value")))}</div>\n')
            html.append(f'      <div class="detail">{interp(_text(outcome.get("detail")))}</div>\n')
            html.append("    </div>\n")
        html.append("  </div>\n")

    html.append("</div>\n")
    return "".join(html)


def render_takeaways(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="takeaway-grid">\n']
    for item in _records(data, "takeaways"):
        html.append('  <div class="takeaway-card">\n')
        if "icon" in item or "text" in item:
            html.append(f'    <div class="takeaway-icon">{_raw(item.get("icon"))}</div>\n')
            html.append(f'    <div class="takeaway-text">{interp(_text(item.get("text")))}</div>\n')
        else:
            html.append(f'    <div class="takeaway-number">{_raw(item.get("number"))}</div>\n')
            html.append(f'    <h4 class="takeaway-title">{interp(_text(item.get("title")))}</h4>\n')
            html.append(f'    <p class="takeaway-text">{interp(_text(item.get("description")))}</p>\n')
        html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_paycheck(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="paycheck-breakdown">\n', "  <h3>Monthly Paycheck Breakdown</h3>\n"]
    for line in _records(data, "lines"):
        line_class = _raw(line.get("type"))
        state_attr = ' data-state-variable="true"' if line.get("isStateVariable") else ""
        html.append(f'  <div class="paycheck-line {line_class}"{state_attr}>\n')
        html.append(f'    <span class="label">{interp(_text(line.get("label")))}</span>\n')
        html.append(f'    <span class="amount">{interp(_text(line.get("amount")))}</span>\n')
        html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_bullet_list(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="bullet-list-full">\n']
    items = _items(data, "items")
    if items:
        html.append("  <ul>\n")
        for item in items:
            html.append(f"    <li>{interp(_text(item))}</li>\n")
        html.append("  </ul>\n")
    html.append("</div>\n")
    return "".join(html)


# ── Extracted layouts ────────────────────────────────────────────────────────


def _render_priority_items(items: list, interp: Interpolator, indent: str) -> str:
    html = []
    for item in items:
        html.append(f'{indent}<div class="priority-item">\n')
        html.append(
            f'{indent}  <div class="rank {_raw(item.get("rankClass"))}">{_raw(item.get("rank"))}</div>\n'
        )
        html.append(f'{indent}  <h4>{interp(_text(item.get("title")))}</h4>\n')
        html.append(f'{indent}  <p>{interp(_text(item.get("description")))}</p>\n')
        html.append(f"{indent}</div>\n")
    return "".join(html)


def render_balanced(data: Mapping, interp: Interpolator) -> str:
    left = _record(data, "leftPanel")
    right = _record(data, "rightPanel")

    html = ['<div class="balanced-layout">\n', '  <div class="content-panel">\n']
    if left.get("title"):
        html.append(f'    <h3>{interp(_text(left["title"]))}</h3>\n')
    for paragraph in _items(left, "paragraphs"):
        html.append(f"    <p>{interp(_text(paragraph))}</p>\n")
    highlight = _record(left, "highlightBox")
    if highlight:
        html.append('    <div class="highlight-box">\n')
        html.append(
            f'      <p><span class="highlight-icon">{_raw(highlight.get("icon"))}</span> '
            f'{interp(_text(highlight.get("text")))}</p>\n'
        )
        html.append("    </div>\n")
    html.append("  </div>\n")

    html.append('  <div class="stats-panel">\n')
    for stat in _records(right, "stats"):
        html.append(f'    <div class="stat-card {_raw(stat.get("color"))}">\n')
        html.append(f'      <div class="number">{interp(_text(stat.get("value")))}</div>\n')
        html.append(f'      <div class="label">{interp(_text(stat.get("label")))}</div>\n')
        html.append("    </div>\n")
    info = _record(right, "infoCard")
    if info:
        html.append(f'    <div class="info-card {_raw(info.get("color"))}">\n')
        html.append(f'      <h4>{interp(_text(info.get("title")))}</h4>\n')
        html.append("      <ul>\n")
        for item in _items(info, "items"):
            html.append(f"        <li>{interp(_text(item))}</li>\n")
        html.append("      </ul>\n")
        html.append("    </div>\n")
    priorities = _records(right, "priorityList")
    if priorities:
        html.append('    <div class="priority-list">\n')
        html.append(_render_priority_items(priorities, interp, "      "))
        html.append("    </div>\n")
    html.append("  </div>\n")

    html.append("</div>\n")
    return "".join(html)


def render_activity(data: Mapping, interp: Interpolator) -> str:
    main = _record(data, "main")
    html = ['<div class="activity-layout">\n']
    if main:
        html.append('  <div class="activity-main">\n')
        html.append(
            f'    <h3><span class="activity-icon">{_raw(main.get("icon"))}</span> '
            f'{interp(_text(main.get("title")))}</h3>\n'
        )
        html.append(f'    <p>{interp(_text(main.get("description")))}</p>\n')
        html.append("  </div>\n")
    html.append('  <div class="activity-steps">\n')
    for number, step in enumerate(_items(data, "steps"), start=1):
        html.append('    <div class="activity-step">\n')
        html.append(f'      <span class="step-num">{number}</span>\n')
        html.append(f"      <p>{interp(_text(step))}</p>\n")
        html.append("    </div>\n")
    html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_check(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="check-grid">\n']
    for question in _records(data, "questions"):
        html.append('  <div class="check-item">\n')
        html.append(f'    <span class="q-num">{_raw(question.get("number"))}</span>\n')
        html.append(f'    <p>{interp(_text(question.get("question")))}</p>\n')
        html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_concept(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="concept-full">\n']
    if data.get("title"):
        html.append(f'  <h3>{interp(_text(data["title"]))}</h3>\n')
    for paragraph in _items(data, "paragraphs"):
        html.append(f"  <p>{interp(_text(paragraph))}</p>\n")
    bullets = _items(data, "bulletPoints")
    if bullets:
        html.append("  <ul>\n")
        for bullet in bullets:
            html.append(f"    <li>{interp(_text(bullet))}</li>\n")
        html.append("  </ul>\n")
    key_point = _record(data, "keyPoint")
    if key_point:
        html.append('  <div class="key-point">\n')
        html.append(f'    <p>{interp(_text(key_point.get("text")))}</p>\n')
        html.append("  </div>\n")
    html.append("</div>\n")
    return "".join(html)


def render_priority(data: Mapping, interp: Interpolator) -> str:
    html = ['<div class="priority-list">\n']
    html.append(_render_priority_items(_records(data, "items"), interp, "  "))
    html.append("</div>\n")
    return "".join(html)


def render_generic(data, interp: Interpolator) -> str:
    """Fallback for unknown layouts: show the raw data."""
    dumped = json.dumps(data, indent=2, ensure_ascii=False)
    return f'<div class="generic-content">\n  <pre>{dumped}</pre>\n</div>\n'


LAYOUT_RENDERERS: Mapping[str, LayoutRenderer] = {
    "objectives-expanded": render_objectives,
    "vocab-container": render_vocab,
    "comparison-grid": render_comparison,
    "scenario-layout": render_scenario,
    "takeaway-grid": render_takeaways,
    "paycheck-breakdown": render_paycheck,
    "bullet-list-full": render_bullet_list,
    "balanced-layout": render_balanced,
    "activity-layout": render_activity,
    "check-grid": render_check,
    "concept-full": render_concept,
    "priority-list": render_priority,
    "generic": render_generic,
}


def render_layout(layout, data, interp: Interpolator) -> str:
    """Render layout data with the renderer registered for layout."""
    renderer = render_generic
    if isinstance(layout, str):
        renderer = LAYOUT_RENDERERS.get(layout, render_generic)
    if data is None or (renderer is not render_generic and not isinstance(data, Mapping)):
        data = {}
    return renderer(data, interp)


# ── Slide bodies by type ─────────────────────────────────────────────────────


def render_title_body(slide: Mapping, content: Mapping, interp: Interpolator) -> str:
    size = content.get("titleSize") or DEFAULT_TITLE_SIZE
    html = ['<div class="title-content">\n']
    html.append(f'  <h1 class="title-{_raw(size)}">{interp(_text(content.get("title")))}</h1>\n')
    if content.get("subtitle"):
        html.append(f'  <p class="subtitle">{interp(_text(content["subtitle"]))}</p>\n')
    html.append("</div>\n")
    return "".join(html)


def render_hook_body(slide: Mapping, content: Mapping, interp: Interpolator) -> str:
    label = content.get("label") or DEFAULT_HOOK_LABEL
    return (
        '<div class="hook-content">\n'
        f'  <div class="label">{interp(_text(label))}</div>\n'
        f'  <div class="question">{interp(_text(content.get("question")))}</div>\n'
        "</div>\n"
    )


def render_discussion_body(slide: Mapping, content: Mapping, interp: Interpolator) -> str:
    badge = content.get("badge") or DEFAULT_DISCUSSION_BADGE
    return (
        '<div class="discussion-content">\n'
        f'  <div class="badge">{interp(_text(badge))}</div>\n'
        f'  <div class="question">{interp(_text(content.get("question")))}</div>\n'
        "</div>\n"
    )


def render_closing_body(slide: Mapping, content: Mapping, interp: Interpolator) -> str:
    tagline = content.get("tagline") or DEFAULT_TAGLINE
    website = content.get("website") or DEFAULT_WEBSITE
    copyright_text = content.get("copyright") or DEFAULT_COPYRIGHT
    return (
        '<div class="closing-content">\n'
        f'  <p class="tagline">{interp(_text(tagline))}</p>\n'
        f'  <p class="website">{interp(_text(website))}</p>\n'
        f'  <p class="copyright">{interp(_text(copyright_text))}</p>\n'
        "</div>\n"
    )


def render_content_body(slide: Mapping, content: Mapping, interp: Interpolator) -> str:
    return render_layout(content.get("layout"), content.get("layoutData"), interp)


SLIDE_RENDERERS = {
    "title": render_title_body,
    "hook": render_hook_body,
    "discussion": render_discussion_body,
    "closing": render_closing_body,
    "content": render_content_body,
}


def _slide_classes(slide: Mapping, content: Mapping) -> str:
    slide_type = slide.get("type") or "content"
    classes = ["slide", f"slide-{slide_type}"]
    if slide_type == "discussion":
        classes.append(
            slide.get("variant") or content.get("variant") or DEFAULT_DISCUSSION_VARIANT
        )
    return " ".join(_raw(c) for c in classes)


def render_slide(slide: Mapping, interp: Interpolator) -> str:
    """Render one slide: type wrapper, optional header, body and numbered footer."""
    content = slide.get("content")
    if not isinstance(content, Mapping):
        content = {}

    html = [f'<div class="{_slide_classes(slide, content)}">\n']

    if content.get("headerTitle"):
        header_color = content.get("headerColor") or slide.get("headerColor") or DEFAULT_HEADER_COLOR
        html.append(f'  <div class="slide-header {_raw(header_color)}">\n')
        html.append(f'    <h1>{interp(_text(content["headerTitle"]))}</h1>\n')
        html.append("  </div>\n")

    slide_type = slide.get("type")
    body_renderer = render_content_body
    if isinstance(slide_type, str):
        body_renderer = SLIDE_RENDERERS.get(slide_type, render_content_body)
    html.append('  <div class="slide-body">\n')
    html.append(body_renderer(slide, content, interp))
    html.append("  </div>\n")

    html.append('  <div class="slide-footer">\n')
    html.append(f'    <span class="slide-number">{_raw(slide.get("number"))}</span>\n')
    html.append("  </div>\n")
    html.append("</div>\n\n")
    return "".join(html)


def render_slides(slides, interp: Interpolator) -> str:
    return "".join(render_slide(slide, interp) for slide in slides if isinstance(slide, Mapping))
