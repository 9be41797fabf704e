import re
from dataclasses import dataclass, replace
from typing import Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .document import Document, Paragraph, StyledRun

BLOCK_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "li"]

_SKIP_TAGS = {"script", "style", "noscript"}
_BOLD_TAGS = {"b", "strong"}
_UNDERLINE_TAGS = {"u", "ins"}

_FONT_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(pt|px)?\s*$")


@dataclass(frozen=True)
class _InlineState:
    link_url: Optional[str] = None
    underline: bool = False
    bold: bool = False
    foreground_color: Optional[str] = None
    background_color: Optional[str] = None


def _parse_style(style: Optional[str]) -> dict[str, str]:
    """Turn an inline style attribute into a lowercase property dict."""
    props = {}
    for decl in (style or "").split(";"):
        if ":" not in decl:
            continue
        name, _, value = decl.partition(":")
        props[name.strip().lower()] = value.strip()
    return props


def _is_bold_weight(value: str) -> bool:
    value = value.lower()
    if value in ("bold", "bolder"):
        return True
    return value.isdigit() and int(value) >= 700


def _font_size(value: str) -> Optional[int]:
    match = _FONT_SIZE_RE.match(value)
    if not match:
        return None
    size, unit = float(match.group(1)), match.group(2)
    if unit == "px":
        size = size * 0.75      # 96dpi px -> pt
    return int(round(size))


def _clean_text(raw: str) -> str:
    # line breaks inside HTML source are layout, not content; spaces are kept
    return re.sub(r"[\r\n\t]+", " ", raw)


def _inherit(state: _InlineState, tag: Tag) -> _InlineState:
    changes = {}
    name = tag.name

    if name == "a" and tag.get("href"):
        changes["link_url"] = tag["href"].strip()
    if name in _UNDERLINE_TAGS:
        changes["underline"] = True
    if name in _BOLD_TAGS:
        changes["bold"] = True

    props = _parse_style(tag.get("style"))
    if "underline" in props.get("text-decoration", "") or "underline" in props.get("text-decoration-line", ""):
        changes["underline"] = True
    if "font-weight" in props:
        changes["bold"] = _is_bold_weight(props["font-weight"])
    if "color" in props:
        changes["foreground_color"] = props["color"]
    if "background-color" in props:
        changes["background_color"] = props["background-color"]

    return replace(state, **changes) if changes else state


def _collect_runs(node: Tag, state: _InlineState, runs: list[StyledRun]) -> None:
    for child in node.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            text = _clean_text(str(child))
            if not text:
                continue
            last = runs[-1] if runs else None
            if last is not None and _same_attributes(last, state):
                last.text += text
            else:
                runs.append(StyledRun(text=text, **state.__dict__))
            continue
        if not isinstance(child, Tag):
            continue
        _collect_runs(child, _inherit(state, child), runs)


def _same_attributes(run: StyledRun, state: _InlineState) -> bool:
    return all(getattr(run, k) == v for k, v in state.__dict__.items())


def _paragraph_kind(tag: Tag) -> str:
    if tag.name.startswith("h"):
        return f"heading{tag.name[1]}"
    if tag.name == "li":
        return "list_item"
    return "normal"


def _parse_block(tag: Tag) -> Paragraph:
    props = _parse_style(tag.get("style"))

    font_family = props.get("font-family")
    if font_family:
        # first family in the stack, unquoted
        font_family = font_family.split(",")[0].strip().strip("'\"")
    font_size = _font_size(props["font-size"]) if "font-size" in props else None
    bold = _is_bold_weight(props["font-weight"]) if "font-weight" in props else None

    runs: list[StyledRun] = []
    _collect_runs(tag, _InlineState(), runs)

    return Paragraph(kind=_paragraph_kind(tag), runs=runs, font_family=font_family or None, font_size=font_size, bold=bold)


def parse_document(html: str) -> Document:
    """
    Flatten an HTML document into paragraphs of styled runs.

    Each outermost h1-h6 / p / li element becomes one paragraph; nested
    blocks contribute their text to it. Inline link, underline, bold and
    color attributes are inherited down the tree and adjacent text with
    identical attributes is merged into a single run.
    """
    soup = BeautifulSoup(html, "lxml")

    for tag in soup(list(_SKIP_TAGS)):
        tag.decompose()

    paragraphs = [
        _parse_block(tag)
        for tag in soup.find_all(BLOCK_TAGS)
        if tag.find_parent(BLOCK_TAGS) is None
    ]
    return Document(paragraphs=paragraphs)
