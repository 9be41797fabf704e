import pytest
from unittest.mock import MagicMock
from doctools.classifier import NON_HTTP_PROTOCOLS, classify_link, trim_link_spaces


# --- helpers ---
def always_broken(url):
    return True


def never_broken(url):
    return False


# --- non-HTTP protocols are skipped without a fetch ---

@pytest.mark.parametrize("url", [
    "mailto:a@b.com",
    "tel:+15551234567",
    "sms:+15551234567",
    "ftp://files.example.com/a.zip",
    "sftp://files.example.com/a.zip",
    "file:///Users/me/notes.txt",
    "MAILTO:SHOUTY@EXAMPLE.COM",
])
def test_non_http_protocols_are_skipped(url):
    check = MagicMock(return_value=True)
    result = classify_link(url, check)
    assert result.category == "skipped_non_http"
    assert result.matched_known_protocol is True
    check.assert_not_called()


def test_protocol_table_is_fixed():
    assert NON_HTTP_PROTOCOLS == ("mailto:", "tel:", "sms:", "ftp:", "sftp:", "file:")


# --- invalid / malformed ---

@pytest.mark.parametrize("url", ["htp://example.com", "htps://example.com", "www.example.com", "", "javascript:void(0)"])
def test_invalid_protocol(url):
    check = MagicMock(return_value=False)
    assert classify_link(url, check).category == "invalid_protocol"
    check.assert_not_called()


def test_none_url_is_invalid():
    assert classify_link(None, never_broken).category == "invalid_protocol"


# --- apple.com ---

def test_apple_link_that_resolves():
    result = classify_link("https://www.apple.com/store", never_broken)
    assert result.category == "apple"
    assert result.escalated_from_apple is False


def test_broken_apple_link_escalates():
    result = classify_link("https://www.apple.com/store", always_broken)
    assert result.category == "broken"
    assert result.escalated_from_apple is True


def test_apple_match_is_case_insensitive():
    assert classify_link("HTTPS://SUPPORT.APPLE.COM/kb", never_broken).category == "apple"


# --- ordinary http(s) ---

def test_broken_link():
    assert classify_link("https://example.com", always_broken).category == "broken"


def test_valid_link():
    assert classify_link("https://example.com", never_broken).category == "valid"


def test_liveness_check_receives_original_url():
    check = MagicMock(return_value=False)
    classify_link("HTTPS://Example.com/CaseSensitive", check)
    check.assert_called_once_with("HTTPS://Example.com/CaseSensitive")


# --- trimming linked text ---

def test_trim_both_sides():
    result = trim_link_spaces("  hello  ")
    assert result.trimmed_text == "hello"
    assert result.leading_trimmed == 2
    assert result.trailing_trimmed == 2
    assert result.changed is True


def test_trim_reports_bounds_in_caller_offsets():
    result = trim_link_spaces(" docs ", start=10, end=16)
    assert (result.start, result.end) == (11, 15)


def test_trim_without_spaces_is_unchanged():
    result = trim_link_spaces("hello", start=3)
    assert result.changed is False
    assert (result.start, result.end) == (3, 8)


def test_trim_all_spaces_keeps_link():
    result = trim_link_spaces("   ")
    assert result.changed is False
    assert result.trimmed_text == "   "


def test_trim_only_ascii_spaces():
    result = trim_link_spaces("\thello\u00a0")
    assert result.changed is False
