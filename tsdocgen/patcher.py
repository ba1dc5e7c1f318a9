"""Write collected fragments into component README files."""

from __future__ import annotations

import asyncio
import difflib
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .extractor import FragmentBuffer
from .logging import get_logger
from .markers import MarkerManager

DEFAULT_COMPONENT_FILTER = "mdc-drawer"


@dataclass
class PatchOutcome:
    """Result of patching a single component README."""

    key: str
    path: Path
    changed: bool = False
    diff: str = ""
    error: Optional[str] = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class Patcher:
    """Replaces the marker region of ``<packages>/<key>/README.md`` per grouping key."""

    def __init__(
        self,
        packages_root: Path | None = None,
        *,
        component_filter: str = DEFAULT_COMPONENT_FILTER,
        marker_manager: MarkerManager | None = None,
        dry_run: bool = False,
    ) -> None:
        self.packages_root = packages_root if packages_root is not None else Path("packages")
        self.component_filter = component_filter
        self.marker_manager = marker_manager or MarkerManager()
        self.dry_run = dry_run
        self.logger = get_logger("patcher")

    def destination(self, key: str) -> Path:
        return self.packages_root / key / "README.md"

    def selects(self, key: str) -> bool:
        return self.component_filter in key

    @staticmethod
    def render(fragments: Sequence[str]) -> str:
        return "\n".join(fragments)

    async def flush(self, buffer: FragmentBuffer) -> List[PatchOutcome]:
        """Patch every selected component concurrently; failures stay per key."""
        selected = [(key, fragments) for key, fragments in buffer.items() if self.selects(key)]
        skipped = len(buffer) - len(selected)
        if skipped:
            self.logger.debug("Filter %r skipped %d component(s)", self.component_filter, skipped)
        tasks = [self._patch_component(key, self.render(fragments)) for key, fragments in selected]
        return list(await asyncio.gather(*tasks))

    def flush_sync(self, buffer: FragmentBuffer) -> List[PatchOutcome]:
        return asyncio.run(self.flush(buffer))

    async def _patch_component(self, key: str, body: str) -> PatchOutcome:
        path = self.destination(key)
        outcome = PatchOutcome(key=key, path=path, dry_run=self.dry_run)

        try:
            original = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("Failed to read %s: %s", path, exc)
            outcome.error = f"read failed: {exc}"
            return outcome

        if not self.marker_manager.has_region(original):
            self.logger.debug(
                "Replacer markers are not the first and last lines of %s; content unchanged",
                path,
            )
        updated = self.marker_manager.replace(original, body)
        outcome.changed = updated != original

        if self.dry_run:
            outcome.diff = _unified_diff(original, updated, path)
            return outcome

        try:
            await asyncio.to_thread(path.write_text, updated, encoding="utf-8")
        except OSError as exc:
            self.logger.error("Failed to write %s: %s", path, exc)
            outcome.error = f"write failed: {exc}"
            return outcome

        self.logger.info("~~ generated %s", path)
        return outcome


def _unified_diff(original: str, updated: str, path: Path) -> str:
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"{path} (current)",
        tofile=f"{path} (generated)",
    )
    return "".join(diff)


__all__ = ["DEFAULT_COMPONENT_FILTER", "PatchOutcome", "Patcher"]
