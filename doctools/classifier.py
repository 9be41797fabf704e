from typing import Callable, Optional

from .models import LinkClassification, TrimResult


# Valid non-HTTP protocols — skipped, never flagged and never fetched
NON_HTTP_PROTOCOLS = ("mailto:", "tel:", "sms:", "ftp:", "sftp:", "file:")

HTTP_PROTOCOLS = ("http://", "https://")

# links to this domain are flagged for review even when they resolve
APPLE_DOMAIN = "apple.com"


def classify_link(url: Optional[str], is_broken: Callable[[str], bool]) -> LinkClassification:
    """
    Classify a link URL into one of:
      skipped_non_http | invalid_protocol | apple | broken | valid

    Priority order:
      1. Known non-HTTP protocol (mailto:, tel:, ...) — skipped, no fetch
      2. Anything not http(s) — invalid (typos like htp://, bare domains)
      3. apple.com — flagged, but escalates to broken if the liveness check fails
      4. Plain http(s) — broken or valid by liveness check

    is_broken is the injected liveness check and receives the URL as given;
    matching is done on a lowercased copy only.
    """
    url = url or ""
    url_lower = url.lower()

    # 1. valid non-HTTP protocol
    if url_lower.startswith(NON_HTTP_PROTOCOLS):
        return LinkClassification(url=url, category="skipped_non_http", matched_known_protocol=True)

    # 2. unknown protocol or malformed link
    if not url_lower.startswith(HTTP_PROTOCOLS):
        return LinkClassification(url=url, category="invalid_protocol")

    # 3. apple.com — broken takes precedence for highlighting
    if APPLE_DOMAIN in url_lower:
        if is_broken(url):
            return LinkClassification(url=url, category="broken", escalated_from_apple=True)
        return LinkClassification(url=url, category="apple")

    # 4. ordinary web link
    if is_broken(url):
        return LinkClassification(url=url, category="broken")
    return LinkClassification(url=url, category="valid")


def trim_link_spaces(text: str, start: int = 0, end: Optional[int] = None) -> TrimResult:
    """
    Work out the span of linked text with leading/trailing spaces excluded.

    text is the linked substring; start/end are its offsets in the caller's
    coordinates (end defaults to start + len(text)). Only ASCII spaces are
    trimmed. A span made entirely of spaces is left as-is since a link
    cannot be empty.
    """
    if end is None:
        end = start + len(text)

    trim_start = 0
    trim_end = len(text)

    while trim_start < len(text) and text[trim_start] == " ":
        trim_start += 1
    while trim_end > trim_start and text[trim_end - 1] == " ":
        trim_end -= 1

    if trim_start >= trim_end:
        # nothing but spaces (or empty) — keep the original bounds
        return TrimResult(trimmed_text=text, leading_trimmed=0, trailing_trimmed=0, start=start, end=end)

    return TrimResult(
        trimmed_text=text[trim_start:trim_end],
        leading_trimmed=trim_start,
        trailing_trimmed=len(text) - trim_end,
        start=start + trim_start,
        end=start + trim_end,
    )
