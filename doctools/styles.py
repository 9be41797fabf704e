from dataclasses import dataclass
from typing import Optional

from .document import Paragraph, StyledRun


# --- highlight colors ---

COLORS = {
    "broken":       "#FF0000",   # red
    "apple":        "#FFFF00",   # yellow
    "invalid":      "#FFA500",   # orange
    "missing_link": "#DDA0DD",   # plum — underlined text with no link
    "link_blue":    "#1155CC",   # Google Docs standard link color
}

# link category -> background color; valid and skipped links are not highlighted
_CATEGORY_COLORS = {
    "broken":           COLORS["broken"],
    "apple":            COLORS["apple"],
    "invalid_protocol": COLORS["invalid"],
}


def highlight_color(category: str) -> Optional[str]:
    return _CATEGORY_COLORS.get(category)


def needs_link_formatting(run: StyledRun) -> bool:
    color = (run.foreground_color or "").upper()
    return color != COLORS["link_blue"] or not run.underline


def apply_link_formatting(run: StyledRun) -> bool:
    """Make a link blue and underlined. Returns True only if something changed."""
    if not needs_link_formatting(run):
        return False
    run.foreground_color = COLORS["link_blue"]
    run.underline = True
    return True


# --- paragraph typography ---

@dataclass(frozen=True)
class ParagraphStyle:
    font_family: str
    font_size: int
    bold: bool


DOCUMENT_STYLES = {
    "heading1": ParagraphStyle(font_family="Helvetica Neue", font_size=24, bold=True),
    "heading2": ParagraphStyle(font_family="Helvetica Neue", font_size=14, bold=True),
    "normal":   ParagraphStyle(font_family="Helvetica Neue", font_size=11, bold=False),
}

# list items are body text; other heading levels are left alone
_KIND_TO_STYLE = {
    "heading1": "heading1",
    "heading2": "heading2",
    "normal": "normal",
    "list_item": "normal",
}


def style_for(paragraph: Paragraph) -> Optional[ParagraphStyle]:
    name = _KIND_TO_STYLE.get(paragraph.kind)
    return DOCUMENT_STYLES[name] if name else None


def needs_formatting(paragraph: Paragraph, style: ParagraphStyle) -> bool:
    if paragraph.font_family != style.font_family or paragraph.font_size != style.font_size:
        return True
    if paragraph.bold != style.bold:
        return True
    # a heading with any non-bold run still needs the paragraph-level bold applied
    return style.bold and not all(run.bold for run in paragraph.runs)


def apply_paragraph_style(paragraph: Paragraph, style: ParagraphStyle) -> None:
    """
    Apply font family/size and paragraph-level weight.

    Headings force every run bold. Body text only clears the paragraph-level
    bold; runs keep their own bold so inline emphasis survives.
    """
    paragraph.font_family = style.font_family
    paragraph.font_size = style.font_size
    paragraph.bold = style.bold

    if style.bold:
        for run in paragraph.runs:
            run.bold = True
