"""
Tests for deck generation and the generator CLI
"""

import json

import pytest
from bs4 import BeautifulSoup

from pfl_slides.errors import InvalidDocumentError, MissingFileError
from pfl_slides.generate import (
    build_deck_html,
    generate_deck,
    list_chapters,
    list_states,
    main,
)
from pfl_slides.mapping import ChapterMapping


class TestGenerateDeck:
    """Tests for the end-to-end generation of one deck."""

    def test_writes_state_chapter_file(self, deck_paths):
        result = generate_deck("oklahoma", "L-03", deck_paths)
        expected = deck_paths.output_dir / "oklahoma" / "chapter-1.3-slides.html"
        assert result.output_path == expected
        assert expected.is_file()
        assert result.slide_count == 3
        assert result.mapping == ChapterMapping("1.3", "Income and Taxes")

    def test_output_is_fully_interpolated(self, deck_paths):
        result = generate_deck("oklahoma", "L-03", deck_paths)
        html = result.output_path.read_text(encoding="utf-8")
        soup = BeautifulSoup(html, "lxml")

        assert soup.title.get_text() == "Chapter 1.3: Income and Taxes"
        assert soup.select_one("header h1").get_text() == "{{CHAPTER_TITLE}}"
        assert soup.select_one("header p").get_text() == "Where your paycheck goes"
        assert len(soup.select("main .slide")) == 3
        assert soup.select_one(".slide-header h1").get_text() == "Taxes in Oklahoma"
        assert "$190.00" in html
        assert "<!-- SLIDES_CONTENT -->" not in html

    def test_missing_mapping_row_falls_back(self, deck_paths, content_doc):
        content_doc["metadata"]["lChapter"] = "L-12"
        deck_paths.content_path("L-12").write_text(json.dumps(content_doc), encoding="utf-8")
        with pytest.warns(UserWarning):
            result = generate_deck("oklahoma", "L-12", deck_paths)
        assert result.output_path.name == "chapter-12-slides.html"

    def test_missing_template_is_fatal(self, deck_paths):
        deck_paths.template_path.unlink()
        with pytest.raises(MissingFileError):
            generate_deck("oklahoma", "L-03", deck_paths)

    def test_missing_content_is_fatal(self, deck_paths):
        with pytest.raises(MissingFileError, match="L-77"):
            generate_deck("oklahoma", "L-77", deck_paths)

    def test_invalid_content_json_is_fatal(self, deck_paths):
        deck_paths.content_path("L-03").write_text("{", encoding="utf-8")
        with pytest.raises(InvalidDocumentError):
            generate_deck("oklahoma", "L-03", deck_paths)
        assert not deck_paths.output_dir.exists()

    def test_missing_state_is_fatal(self, deck_paths):
        with pytest.raises(MissingFileError, match="texas"):
            generate_deck("texas", "L-03", deck_paths)

    def test_missing_mapping_file_is_fatal(self, deck_paths):
        deck_paths.state_path("kansas").write_text("{}", encoding="utf-8")
        with pytest.raises(MissingFileError) as exc_info:
            generate_deck("kansas", "L-03", deck_paths)
        assert len(exc_info.value.tried) == 3


class TestBuildDeckHtml:
    """Tests for template assembly."""

    def test_only_first_state_chapter_replaced(self):
        template = "{{STATE_CHAPTER}} <!-- SLIDES_CONTENT --> {{STATE_CHAPTER}}"
        html = build_deck_html(template, {"slides": []}, {}, ChapterMapping("2.4", "x"))
        assert html == "2.4  {{STATE_CHAPTER}}"


class TestListings:
    """Tests for state and chapter listings."""

    def test_list_states(self, deck_paths):
        deck_paths.state_path("alabama").write_text("{}", encoding="utf-8")
        assert list_states(deck_paths) == ["alabama", "oklahoma"]

    def test_list_chapters(self, deck_paths):
        deck_paths.content_path("L-09").write_text("oops", encoding="utf-8")
        assert list_chapters(deck_paths) == [
            ("L-03", "Income and Taxes", True),
            ("L-09", None, False),
        ]


class TestCli:
    """Tests for exit codes of the generator CLI."""

    def test_generate_success(self, deck_root, capsys):
        assert main([f"--root={deck_root}", "--state=Oklahoma", "--chapter=l-03"]) == 0
        assert (deck_root / "output" / "oklahoma" / "chapter-1.3-slides.html").is_file()
        assert "Done!" in capsys.readouterr().out

    def test_generate_failure(self, deck_root, capsys):
        assert main([f"--root={deck_root}", "--state=nowhere", "--chapter=L-03"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_validate_exit_codes(self, deck_root, tmp_path):
        assert main(["--validate", str(deck_root / "slide-content" / "L-03.json")]) == 0
        bad = tmp_path / "bad.json"
        bad.write_text('{"slides": []}', encoding="utf-8")
        assert main(["--validate", str(bad)]) == 1

    def test_no_arguments_prints_help(self, capsys):
        assert main([]) == 0
        assert "--state" in capsys.readouterr().out

    def test_list_states(self, deck_root, capsys):
        assert main([f"--root={deck_root}", "--list-states"]) == 0
        assert "oklahoma" in capsys.readouterr().out
