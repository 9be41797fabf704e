import logging
import os

import requests

logger = logging.getLogger(__name__)

# realistic browser UA — some sites answer bare clients with 403/404
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_TIMEOUT = float(os.getenv("DOCTOOLS_FETCH_TIMEOUT", "10"))  # seconds

BROKEN_STATUS = 404


def is_link_broken(url: str, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """
    Liveness check for a single URL.

    Redirects are not followed — a 301/302 means the link still resolves.
    Returns True for a 404, and also when the request cannot be completed at
    all (DNS failure, timeout, refused connection): unreachable links are
    reported as broken rather than unknown.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }
    try:
        # stream=True so only the status line and headers are read
        response = requests.get(url, headers=headers, timeout=timeout, allow_redirects=False, stream=True)
    except Exception as exc:
        logger.warning("Liveness check failed for %s: %s", url, exc)
        return True

    status_code = response.status_code
    response.close()

    if status_code == BROKEN_STATUS:
        logger.info("Broken link (404): %s", url)
        return True
    return False
