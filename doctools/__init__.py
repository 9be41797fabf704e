from .casing import (
    CASE_STYLES,
    change_case,
    to_initial_caps,
    to_lower,
    to_sentence_case,
    to_title_case,
    to_upper,
    transform_selection,
)
from .classifier import classify_link, trim_link_spaces
from .core import check_document_links, fix_document_formatting
from .fetcher import is_link_broken
from .models import LinkClassification, TextRun
from .parser import parse_document

__all__ = [
    "CASE_STYLES",
    "change_case",
    "to_initial_caps",
    "to_lower",
    "to_sentence_case",
    "to_title_case",
    "to_upper",
    "transform_selection",
    "classify_link",
    "trim_link_spaces",
    "check_document_links",
    "fix_document_formatting",
    "is_link_broken",
    "LinkClassification",
    "TextRun",
    "parse_document",
]
