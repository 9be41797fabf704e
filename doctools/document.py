from dataclasses import dataclass, field, replace
from typing import Optional

from .casing import case_edits, change_case
from .classifier import trim_link_spaces


@dataclass
class StyledRun:
    text: str
    link_url: Optional[str] = None
    underline: bool = False
    bold: bool = False
    foreground_color: Optional[str] = None
    background_color: Optional[str] = None

    @property
    def is_link(self) -> bool:
        return bool(self.link_url)

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items()}


@dataclass
class Paragraph:
    kind: str = "normal"                  # heading1..heading6 | normal | list_item
    runs: list[StyledRun] = field(default_factory=list)

    # paragraph-level attributes; None when the source didn't set them
    font_family: Optional[str] = None
    font_size: Optional[int] = None
    bold: Optional[bool] = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "font_family": self.font_family,
            "font_size": self.font_size,
            "bold": self.bold,
            "runs": [run.to_dict() for run in self.runs],
        }


@dataclass
class Document:
    paragraphs: list[Paragraph] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)

    def to_dict(self) -> dict:
        return {"paragraphs": [p.to_dict() for p in self.paragraphs]}


@dataclass
class LinkSpan:
    paragraph_index: int
    run: StyledRun

    @property
    def url(self) -> str:
        return self.run.link_url

    @property
    def text(self) -> str:
        return self.run.text


def extract_links(document: Document) -> list[LinkSpan]:
    """One entry per linked run, in document order."""
    return [
        LinkSpan(paragraph_index=p_idx, run=run)
        for p_idx, paragraph in enumerate(document.paragraphs)
        for run in paragraph.runs
        if run.is_link
    ]


def extract_missing_links(document: Document) -> list[LinkSpan]:
    """Underlined runs with no link — usually a link that was lost on paste."""
    return [
        LinkSpan(paragraph_index=p_idx, run=run)
        for p_idx, paragraph in enumerate(document.paragraphs)
        for run in paragraph.runs
        if run.underline and not run.is_link and run.text.strip()
    ]


def trim_link_run(paragraph: Paragraph, run_index: int) -> bool:
    """
    Move leading/trailing spaces of a link run out of the link.

    The spaces stay in the paragraph as separate runs without the link and
    without underline. Returns True if the run was split.
    """
    run = paragraph.runs[run_index]
    if not run.is_link:
        return False

    trimmed = trim_link_spaces(run.text)
    if not trimmed.changed:
        return False

    pieces = []
    if trimmed.leading_trimmed:
        pieces.append(replace(run, text=run.text[:trimmed.start], link_url=None, underline=False))
    pieces.append(replace(run, text=trimmed.trimmed_text))
    if trimmed.trailing_trimmed:
        pieces.append(replace(run, text=run.text[trimmed.end:], link_url=None, underline=False))

    paragraph.runs[run_index:run_index + 1] = pieces
    return True


def trim_document_links(document: Document) -> int:
    """Trim spaces from every link run. Returns the number of links changed."""
    trimmed_count = 0
    for paragraph in document.paragraphs:
        # walk backwards so splitting a run doesn't shift the ones still to visit
        for run_index in range(len(paragraph.runs) - 1, -1, -1):
            if trim_link_run(paragraph, run_index):
                trimmed_count += 1
    return trimmed_count


def apply_case_to_runs(runs: list[StyledRun], style: str) -> int:
    """
    Change the case of text spread over several runs without merging them.

    The transform sees the joined text (so title case knows the first and
    last word), and only the characters that changed are written back into
    their own runs. Returns the number of characters changed.
    """
    original = "".join(run.text for run in runs)
    edits = case_edits(original, change_case(original, style))
    if not edits:
        return 0

    # map each absolute offset back to (run, offset inside run)
    chars = [list(run.text) for run in runs]
    owners = [(r_idx, c_idx) for r_idx, run in enumerate(runs) for c_idx in range(len(run.text))]
    for pos, new_char in edits:
        r_idx, c_idx = owners[pos]
        chars[r_idx][c_idx] = new_char

    for run, run_chars in zip(runs, chars):
        run.text = "".join(run_chars)
    return len(edits)
