import asyncio
import logging
import os
from typing import Callable

from .classifier import classify_link
from .document import Document, extract_links, extract_missing_links, trim_document_links
from .fetcher import is_link_broken
from .models import FormattingReport, LinkClassification, LinkReport, LinkResult
from .styles import COLORS, apply_link_formatting, apply_paragraph_style, highlight_color, needs_formatting, style_for

logger = logging.getLogger(__name__)

MAX_CONCURRENT_CHECKS = int(os.getenv("DOCTOOLS_MAX_CONCURRENT_CHECKS", "8"))

_SCOPE_TEXT = {
    "document": " in document",
    "tab": " in active tab",
}


def _guarded(is_broken: Callable[[str], bool]) -> Callable[[str], bool]:
    """Wrap an injected liveness check so a raising check counts as broken."""
    def check(url: str) -> bool:
        try:
            return bool(is_broken(url))
        except Exception as exc:
            logger.warning("Liveness check raised for %s: %s", url, exc)
            return True
    return check


async def classify_links(
    urls: list[str],
    is_broken: Callable[[str], bool] = is_link_broken,
    max_concurrency: int = MAX_CONCURRENT_CHECKS,
) -> list[LinkClassification]:
    """
    Classify many URLs, running liveness checks concurrently.

    Checks run in the default thread executor (is_broken is blocking) with at
    most max_concurrency in flight. Results come back in input order.
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrency))
    check = _guarded(is_broken)
    loop = asyncio.get_event_loop()

    async def classify_one(url: str) -> LinkClassification:
        async with semaphore:
            return await loop.run_in_executor(None, classify_link, url, check)

    return list(await asyncio.gather(*(classify_one(url) for url in urls)))


def build_link_message(counts: dict[str, int], scope: str = "document") -> str:
    scope_text = _SCOPE_TEXT.get(scope, f" in {scope}")
    message = (
        f"Found {counts['broken']} broken link(s) (highlighted in red)\n"
        f"Found {counts['apple']} Apple.com link(s) (highlighted in yellow)\n"
        f"Skipped {counts['skipped_non_http']} valid non-HTTP link(s) (email, phone, etc.)\n"
        f"Fixed formatting on {counts['formatted']} link(s){scope_text}"
    )
    if counts["spaces_trimmed"] > 0:
        message += f"\nTrimmed spaces from {counts['spaces_trimmed']} link(s)"
    if counts["invalid_protocol"] > 0:
        message += f"\nFound {counts['invalid_protocol']} invalid/malformed link(s) (highlighted in orange)"
    if counts["missing_link"] > 0:
        message += f"\nFound {counts['missing_link']} underlined text(s) without links (highlighted in purple)"
    return message


async def check_document_links(
    document: Document,
    is_broken: Callable[[str], bool] = is_link_broken,
    max_concurrency: int = MAX_CONCURRENT_CHECKS,
    scope: str = "document",
) -> LinkReport:
    """
    Run the full link pass over a document, updating its runs in place.

    Order matters: underlined-without-link runs are collected before link
    spaces are trimmed (so the shaved-off spaces are never reported), links
    are then styled blue/underlined, classified, and highlighted.
    """
    report = LinkReport(scope=scope)

    missing = extract_missing_links(document)
    report.counts["spaces_trimmed"] = trim_document_links(document)

    links = extract_links(document)
    for link in links:
        if apply_link_formatting(link.run):
            report.counts["formatted"] += 1

    classifications = await classify_links([link.url for link in links], is_broken, max_concurrency)

    for link, classification in zip(links, classifications):
        color = highlight_color(classification.category)
        if color:
            link.run.background_color = color
        report.counts[classification.category] += 1
        report.links.append(LinkResult(
            url=link.url,
            text=link.text,
            category=classification.category,
            paragraph_index=link.paragraph_index,
            highlight_color=color,
            escalated_from_apple=classification.escalated_from_apple,
        ))

    for item in missing:
        item.run.background_color = COLORS["missing_link"]
        report.counts["missing_link"] += 1

    report.message = build_link_message(report.counts, scope)
    logger.info(
        "Checked %d link(s): %d broken, %d invalid, %d missing",
        len(links), report.counts["broken"], report.counts["invalid_protocol"], report.counts["missing_link"],
    )
    return report


_COUNT_KEYS = {
    "heading1": "h1",
    "heading2": "h2",
    "normal": "normal",
    "list_item": "list_items",
}


def build_formatting_message(counts: dict[str, int]) -> str:
    if sum(counts.values()) == 0:
        return "All paragraphs and list items already have correct formatting. No changes needed."
    return (
        "Document formatting updated:\n"
        f"{counts['h1']} Heading 1 paragraph(s) formatted (Helvetica Neue Bold 24pt)\n"
        f"{counts['h2']} Heading 2 paragraph(s) formatted (Helvetica Neue Bold 14pt)\n"
        f"{counts['normal']} Normal text paragraph(s) formatted (Helvetica Neue 11pt)\n"
        f"{counts['list_items']} List item(s) formatted (Helvetica Neue 11pt)"
    )


def fix_document_formatting(document: Document) -> FormattingReport:
    """Apply heading/body typography to every paragraph that isn't already correct."""
    report = FormattingReport()

    for index, paragraph in enumerate(document.paragraphs):
        style = style_for(paragraph)
        if style is None or not needs_formatting(paragraph, style):
            continue
        apply_paragraph_style(paragraph, style)
        report.counts[_COUNT_KEYS[paragraph.kind]] += 1
        report.changed_paragraphs.append(index)

    report.message = build_formatting_message(report.counts)
    return report
