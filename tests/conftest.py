"""
Pytest Configuration and Fixtures

Builds a throwaway copy of the slide generator directory layout:

    <tmp>/generator/slide-template.html
    <tmp>/generator/slide-content/L-03.json
    <tmp>/state-data/states/oklahoma.json
    <tmp>/Simple-Data-Files-Updated/Oklahoma-simple-data.md
    <tmp>/slide-decks/L-02-budgeting.html
"""

import json
from pathlib import Path

import pytest

from pfl_slides.config import DeckPaths

TEMPLATE = """<!DOCTYPE html>
<html>
<head><title>Chapter {{STATE_CHAPTER}}: {{CHAPTER_TITLE}}</title></head>
<body>
<header><h1>{{CHAPTER_TITLE}}</h1><p>{{CHAPTER_SUBTITLE}}</p><p>{{STATE_NAME}}</p></header>
<main>
<!-- SLIDES_CONTENT -->
</main>
</body>
</html>
"""

MAPPING_MD = """# Oklahoma Simple Data

Some prose that is not part of the table.

| L-Chapter | State Chapter | Title |
|-----------|---------------|-------|
| L-01 | 1.1 | Financial Goals |
| L-03 | 1.3 | Income and Taxes |
| L-04 | 2.1 |
"""

LEGACY_DECK = """<!DOCTYPE html>
<html>
<head><title>PFL Academy - L-2 Budgeting Basics</title></head>
<body>
<div class="slide slide-title">
  <h1 style="font-size: 72px">Budgeting   Basics</h1>
  <p class="subtitle">Making a plan for your money</p>
</div>
<div class="slide slide-hook">
  <div class="label">Essential Question</div>
  <div class="question">Where does your <em>money</em> go each month?</div>
</div>
<div class="slide slide-content">
  <div class="slide-header teal"><h2>Learning Objectives</h2></div>
  <div class="slide-body">
    <div class="objectives-expanded">
      <div class="objective-card"><span class="number">1</span><h3>Explain</h3><p>why a budget matters</p></div>
      <div class="objective-card"><span class="number">2</span><h3>Build</h3><p>a monthly budget</p></div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header blue"><h2>Key Vocabulary</h2></div>
  <div class="slide-body">
    <div class="vocab-container">
      <div class="vocab-row">
        <div class="vocab-term-box"><span class="term">Budget</span></div>
        <div class="vocab-def-box"><p>A plan for spending and saving</p></div>
        <div class="vocab-example-box"><p>Setting aside $50 for groceries</p></div>
      </div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header"><h2>Needs vs Wants</h2></div>
  <div class="slide-body">
    <div class="comparison-grid">
      <div class="compare-column left"><h3>📋 Needs</h3><ul><li>Rent</li><li>Food</li></ul></div>
      <div class="compare-column right"><h3>🎁 Wants</h3><ul><li>Concert tickets</li></ul></div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header"><h2>Meet Maya</h2></div>
  <div class="slide-body">
    <div class="scenario-layout">
      <div class="scenario-card">
        <div class="name"><span class="icon">👩</span> Maya</div>
        <p>Maya earns {{MIN_WAGE}} per hour.</p>
      </div>
      <div class="scenario-outcomes">
        <div class="outcome-box before"><div class="label">Before</div><div class="value">$0 saved</div><div class="detail">No plan</div></div>
        <div class="outcome-box after"><div class="label">After</div><div class="value">$300 saved</div><div class="detail">With a budget</div></div>
      </div>
    </div>
  </div>
</div>
<div class="slide slide-discussion" style="background: var(--primary)">
  <span class="badge">Pair Share</span>
  <div class="question">What is one <strong>want</strong> you could cut?</div>
</div>
<div class="slide slide-content">
  <div class="slide-header purple"><h2>Key Takeaways</h2></div>
  <div class="slide-body">
    <div class="takeaway-grid">
      <div class="takeaway-item"><span class="number">1</span><h4>Plan first</h4><p>Decide before you spend</p></div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header"><h2>Why Budgets Work</h2></div>
  <div class="slide-body">
    <div class="balanced-layout">
      <div class="content-panel">
        <h3>Tracking pays off</h3>
        <p>People who track spending save <strong>more</strong>.</p>
        <div class="highlight-box"><p>💡 Start with one week of receipts</p></div>
      </div>
      <div class="stats-panel">
        <div class="stat-card purple"><div class="number">62%</div><div class="label">of teens have no budget</div></div>
        <div class="info-card blue"><h4>Quick wins</h4><ul><li>Cook at home</li><li>Cancel unused apps</li></ul></div>
      </div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header teal"><h2>Try It</h2></div>
  <div class="slide-body">
    <div class="activity-layout">
      <div class="activity-main">
        <h3>\u270f\ufe0f Budget Builder</h3>
        <p>Sort last month's spending.</p>
        <p>Use the worksheet.</p>
      </div>
      <div class="activity-steps">
        <div class="activity-step"><span class="step-num">1</span><p>List your income</p></div>
        <div class="activity-step"><span class="step-num">2</span><p>List your expenses</p></div>
      </div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header blue"><h2>Check Your Understanding</h2></div>
  <div class="slide-body">
    <div class="check-grid">
      <div class="check-item"><span class="q-num">1</span><p>What is a fixed expense?</p></div>
      <div class="check-item"><span class="q-num">2</span><p>Name one variable expense.</p></div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header"><h2>The 50/30/20 Rule</h2></div>
  <div class="slide-body">
    <div class="concept-full">
      <h3>Split every paycheck</h3>
      <p>Divide take-home pay into <em>three</em> parts.</p>
      <ul><li>50% needs</li><li>30% wants</li><li>20% savings</li></ul>
      <div class="key-point"><p>Savings come first, not last.</p></div>
    </div>
  </div>
</div>
<div class="slide slide-content">
  <div class="slide-header purple"><h2>Where Extra Money Goes</h2></div>
  <div class="slide-body">
    <div class="priority-list">
      <div class="priority-item"><div class="rank first">1</div><h4>Emergency fund</h4><p>Three months of expenses</p></div>
      <div class="priority-item"><div class="rank second">2</div><h4>High-interest debt</h4><p>Pay it down fast</p></div>
    </div>
  </div>
</div>
<div class="slide slide-closing">
  <p class="tagline">See you next time</p>
</div>
</body>
</html>
"""


@pytest.fixture
def content_doc() -> dict:
    return {
        "metadata": {
            "lChapter": "L-03",
            "title": "Income and Taxes",
            "subtitle": "Where your paycheck goes",
            "totalSlides": 3,
            "hasStateVariables": True,
            "stateVariablesUsed": ["STATE_NAME", "INCOME_TAX_RATE"],
        },
        "slides": [
            {
                "number": 1,
                "type": "title",
                "content": {"title": "Income and Taxes", "titleSize": "large", "subtitle": "{{STATE_NAME}} edition"},
            },
            {
                "number": 2,
                "type": "content",
                "content": {
                    "headerTitle": "Taxes in {{STATE_NAME}}",
                    "headerColor": "teal",
                    "layout": "paycheck-breakdown",
                    "layoutData": {
                        "lines": [
                            {"label": "Gross pay", "amount": "$4,000.00", "type": "gross"},
                            {
                                "label": "State tax ({{INCOME_TAX_RATE}}%)",
                                "amount": "{{CALCULATED_STATE_TAX_MONTHLY}}",
                                "type": "deduction",
                                "isStateVariable": True,
                            },
                        ]
                    },
                },
            },
            {"number": 3, "type": "closing", "content": {}},
        ],
    }


@pytest.fixture
def state_vars() -> dict:
    return {"STATE_NAME": "Oklahoma", "INCOME_TAX_RATE": "4.75", "MIN_WAGE": 7.25}


@pytest.fixture
def deck_root(tmp_path: Path, content_doc: dict, state_vars: dict) -> Path:
    """A complete generator directory with one state and one chapter."""
    root = tmp_path / "generator"
    (root / "slide-content").mkdir(parents=True)
    (tmp_path / "state-data" / "states").mkdir(parents=True)
    (tmp_path / "Simple-Data-Files-Updated").mkdir()
    (tmp_path / "slide-decks").mkdir()

    (root / "slide-template.html").write_text(TEMPLATE, encoding="utf-8")
    (root / "slide-content" / "L-03.json").write_text(json.dumps(content_doc), encoding="utf-8")
    (tmp_path / "state-data" / "states" / "oklahoma.json").write_text(
        json.dumps(state_vars), encoding="utf-8"
    )
    (tmp_path / "Simple-Data-Files-Updated" / "Oklahoma-simple-data.md").write_text(
        MAPPING_MD, encoding="utf-8"
    )
    (tmp_path / "slide-decks" / "L-02-budgeting.html").write_text(LEGACY_DECK, encoding="utf-8")
    return root


@pytest.fixture
def deck_paths(deck_root: Path) -> DeckPaths:
    return DeckPaths.from_root(deck_root)


@pytest.fixture
def legacy_deck() -> str:
    return LEGACY_DECK


@pytest.fixture
def mapping_md() -> str:
    return MAPPING_MD
