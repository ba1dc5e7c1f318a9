"""Two-phase pipeline: build the fragment buffer, then flush it to READMEs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping

from .config import TsDocGenConfig, load_config
from .extractor import DEFAULT_MODULE_PREFIX, Extractor, FragmentBuffer
from .logging import get_logger
from .markers import MarkerManager
from .patcher import PatchOutcome, Patcher


class InputError(RuntimeError):
    """Raised when the reflection JSON cannot be loaded."""


@dataclass
class RunResult:
    """Fragments collected and per-component outcomes of a run."""

    buffer: FragmentBuffer
    outcomes: List[PatchOutcome] = field(default_factory=list)

    @property
    def failures(self) -> List[PatchOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


class Orchestrator:
    """Coordinates extraction and README patching for a project root."""

    def __init__(self, marker_manager: MarkerManager | None = None) -> None:
        self.marker_manager = marker_manager or MarkerManager()
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str = ".",
        *,
        input_path: str | None = None,
        dry_run: bool = False,
    ) -> RunResult:
        root = Path(path).expanduser().resolve()
        if not root.is_dir():
            raise InputError(f"Project root is not a directory: {root}")
        config = load_config(root)
        source = Path(input_path).expanduser() if input_path else config.input_path
        self.logger.debug("Reading reflection JSON from %s", source)
        document = self.load_document(source)

        buffer = self.build_buffer(document, config)
        self.logger.debug("Collected fragments for %d component(s)", len(buffer))
        outcomes = self.flush_buffer(buffer, config, dry_run=dry_run)
        return RunResult(buffer=buffer, outcomes=outcomes)

    @staticmethod
    def load_document(source: Path) -> Mapping[str, Any]:
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise InputError(f"Reflection JSON not found: {source}") from exc
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise InputError(f"Failed to load {source}: {exc}") from exc
        if not isinstance(data, dict):
            raise InputError(f"{source} must contain a JSON object at the root")
        return data

    def build_buffer(
        self, document: Mapping[str, Any], config: TsDocGenConfig | None = None
    ) -> FragmentBuffer:
        prefix = config.module_prefix if config is not None else DEFAULT_MODULE_PREFIX
        return Extractor(module_prefix=prefix).generate_docs(document)

    def flush_buffer(
        self,
        buffer: FragmentBuffer,
        config: TsDocGenConfig,
        *,
        dry_run: bool = False,
    ) -> List[PatchOutcome]:
        patcher = Patcher(
            config.packages_path,
            component_filter=config.component_filter,
            marker_manager=self.marker_manager,
            dry_run=dry_run,
        )
        return patcher.flush_sync(buffer)


__all__ = ["InputError", "Orchestrator", "RunResult"]
