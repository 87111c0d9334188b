from __future__ import annotations

import logging

import pytest

from epub_maker.core.text_splitter import project_from_text, split_text_into_chapters

SAMPLE = "第一章 开始\n正文A\n第二章 继续\n正文B"


def test_default_pattern_splits_chinese_headings() -> None:
    chapters = split_text_into_chapters(SAMPLE)

    assert [c.title for c in chapters] == ["第一章 开始", "第二章 继续"]
    assert "<p>正文A</p>" in chapters[0].content
    assert "<p>正文B</p>" in chapters[1].content
    assert chapters[0].content.startswith("<h1>第一章 开始</h1>")
    assert all(c.level == 1 for c in chapters)


def test_text_before_first_heading_is_kept() -> None:
    chapters = split_text_into_chapters("Preface line\n\nChapter 1\nBody")

    assert [c.title for c in chapters] == ["Start", "Chapter 1"]
    assert "<p>Preface line</p>" in chapters[0].content


def test_blank_lead_in_is_dropped() -> None:
    chapters = split_text_into_chapters("\n\n序章\n内容")

    assert [c.title for c in chapters] == ["序章"]


def test_text_without_headings_is_one_chapter() -> None:
    chapters = split_text_into_chapters("just text\nmore text")

    assert len(chapters) == 1
    assert chapters[0].title == "Start"
    assert chapters[0].content.startswith("<h1>Start</h1>")
    assert "<p>just text</p><p>more text</p>" in chapters[0].content


@pytest.mark.parametrize("text", ["", "\n\n", "   \n"])
def test_blank_text_is_one_empty_chapter(text: str) -> None:
    chapters = split_text_into_chapters(text)

    assert len(chapters) == 1
    assert chapters[0].title == "Chapter 1"
    assert chapters[0].content == "<h1>Chapter 1</h1>\n"


def test_headings_match_case_insensitively() -> None:
    chapters = split_text_into_chapters("CHAPTER 1\na\nchapter 2\nb")

    assert [c.title for c in chapters] == ["CHAPTER 1", "chapter 2"]


def test_custom_pattern() -> None:
    chapters = split_text_into_chapters("Part 1\na\nPart 2\nb", pattern=r"^Part \d+")

    assert [c.title for c in chapters] == ["Part 1", "Part 2"]


def test_invalid_pattern_falls_back_to_default(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        chapters = split_text_into_chapters(SAMPLE, pattern="(unclosed")

    assert len(chapters) == 2
    assert "Invalid chapter pattern" in caplog.text


def test_paragraphs_are_escaped() -> None:
    chapters = split_text_into_chapters("第一章 <A&B>\n1 < 2 & 3")

    assert chapters[0].content == "<h1>第一章 &lt;A&amp;B&gt;</h1>\n<p>1 &lt; 2 &amp; 3</p>"


def test_project_from_text() -> None:
    project = project_from_text(SAMPLE, "小说")

    assert project.metadata.title == "小说"
    assert project.metadata.creator == "未知作者"
    assert project.metadata.language == "zh"
    assert len(project.chapters) == 2
