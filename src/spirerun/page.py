"""Saved run page HTML -> report text."""

import logging

from bs4 import BeautifulSoup

from spirerun.vocab import Difficulty

logger = logging.getLogger(__name__)


def report_text_from_html(html: str) -> str:
    """Return the run report text block of a saved leaderboard run page.

    The page text is joined with newlines and trimmed to start at the first
    difficulty literal; the parser collapses the rest of the layout.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(separator="\n", strip=True)

    starts = [
        idx for idx in (text.find(d.value) for d in Difficulty) if idx >= 0
    ]
    if not starts:
        logger.debug("No difficulty literal in page text (%d chars)", len(text))
        return text
    return text[min(starts):]
