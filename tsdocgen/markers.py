"""Replacer markers delimiting the generated README region."""

from __future__ import annotations

import re
from typing import Optional, Pattern


class MarkerManager:
    """Replaces the marker region of a README idempotently.

    The pattern is anchored to the start and end of the content, so the start
    marker must be the first line and the end marker the last line (a single
    trailing newline is allowed). Anywhere else the content is left untouched.
    """

    START_TOKEN = "<!-- docgen-tsdoc-replacer:start -->"
    END_TOKEN = "<!-- docgen-tsdoc-replacer:end -->"

    def __init__(self) -> None:
        start = re.escape(self.START_TOKEN)
        end = re.escape(self.END_TOKEN)
        self._region: Pattern[str] = re.compile(rf"\A{start}\n.*{end}$", re.DOTALL)
        self._body: Pattern[str] = re.compile(rf"\A{start}\n(?:(.*)\n)?{end}$", re.DOTALL)

    def wrap(self, body: str) -> str:
        """Return ``body`` between the start and end markers."""
        return f"{self.START_TOKEN}\n{body}\n{self.END_TOKEN}"

    def has_region(self, markdown: str) -> bool:
        return self._region.search(markdown) is not None

    def replace(self, markdown: str, body: str) -> str:
        """Replace the marker region with ``body``; unchanged when markers are misplaced."""
        wrapped = self.wrap(body)
        return self._region.sub(lambda _match: wrapped, markdown, count=1)

    def extract(self, markdown: str) -> Optional[str]:
        """Return the current body between well-positioned markers."""
        match = self._body.search(markdown)
        if match is None:
            return None
        return match.group(1) or ""


__all__ = ["MarkerManager"]
