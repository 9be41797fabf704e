from doctools.document import Paragraph, StyledRun
from doctools.styles import (
    COLORS,
    DOCUMENT_STYLES,
    apply_link_formatting,
    apply_paragraph_style,
    highlight_color,
    needs_formatting,
    needs_link_formatting,
    style_for,
)


# --- highlight colors ---

def test_highlight_colors_by_category():
    assert highlight_color("broken") == "#FF0000"
    assert highlight_color("apple") == "#FFFF00"
    assert highlight_color("invalid_protocol") == "#FFA500"


def test_valid_and_skipped_are_not_highlighted():
    assert highlight_color("valid") is None
    assert highlight_color("skipped_non_http") is None


# --- link styling ---

def test_link_already_blue_and_underlined():
    run = StyledRun("x", link_url="https://a.com", underline=True, foreground_color="#1155cc")
    assert needs_link_formatting(run) is False
    assert apply_link_formatting(run) is False


def test_link_missing_underline_is_fixed():
    run = StyledRun("x", link_url="https://a.com", foreground_color=COLORS["link_blue"])
    assert apply_link_formatting(run) is True
    assert run.underline is True


def test_link_wrong_color_is_fixed():
    run = StyledRun("x", link_url="https://a.com", underline=True, foreground_color="#000000")
    assert apply_link_formatting(run) is True
    assert run.foreground_color == "#1155CC"


# --- paragraph typography ---

def test_style_for_paragraph_kinds():
    assert style_for(Paragraph(kind="heading1")) == DOCUMENT_STYLES["heading1"]
    assert style_for(Paragraph(kind="heading2")) == DOCUMENT_STYLES["heading2"]
    assert style_for(Paragraph(kind="list_item")) == DOCUMENT_STYLES["normal"]
    assert style_for(Paragraph(kind="heading3")) is None


def test_correct_normal_paragraph_needs_nothing():
    paragraph = Paragraph(kind="normal", font_family="Helvetica Neue", font_size=11, bold=False,
                          runs=[StyledRun("plain"), StyledRun("bold bit", bold=True)])
    assert needs_formatting(paragraph, DOCUMENT_STYLES["normal"]) is False


def test_wrong_size_needs_formatting():
    paragraph = Paragraph(kind="normal", font_family="Helvetica Neue", font_size=12, bold=False)
    assert needs_formatting(paragraph, DOCUMENT_STYLES["normal"]) is True


def test_unset_attributes_need_formatting():
    assert needs_formatting(Paragraph(kind="normal"), DOCUMENT_STYLES["normal"]) is True


def test_heading_with_plain_run_needs_formatting():
    paragraph = Paragraph(kind="heading1", font_family="Helvetica Neue", font_size=24, bold=True,
                          runs=[StyledRun("Title", bold=True), StyledRun(" part", bold=False)])
    assert needs_formatting(paragraph, DOCUMENT_STYLES["heading1"]) is True


def test_heading_style_bolds_every_run():
    paragraph = Paragraph(kind="heading2", runs=[StyledRun("A"), StyledRun("B")])
    apply_paragraph_style(paragraph, DOCUMENT_STYLES["heading2"])
    assert (paragraph.font_family, paragraph.font_size, paragraph.bold) == ("Helvetica Neue", 14, True)
    assert all(run.bold for run in paragraph.runs)


def test_normal_style_keeps_inline_bold():
    paragraph = Paragraph(kind="normal", bold=True, runs=[StyledRun("plain"), StyledRun("strong", bold=True)])
    apply_paragraph_style(paragraph, DOCUMENT_STYLES["normal"])
    assert paragraph.bold is False
    assert [run.bold for run in paragraph.runs] == [False, True]
