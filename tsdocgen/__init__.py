"""Generate README method tables from TypeDoc reflection JSON."""

from .extractor import Extractor, FragmentBuffer, clean_comment
from .markers import MarkerManager
from .models import Comment, CommentTag, ReflectionKind, ReflectionNode, Signature
from .orchestrator import InputError, Orchestrator, RunResult
from .patcher import PatchOutcome, Patcher

__all__ = [
    "Comment",
    "CommentTag",
    "Extractor",
    "FragmentBuffer",
    "InputError",
    "MarkerManager",
    "Orchestrator",
    "PatchOutcome",
    "Patcher",
    "ReflectionKind",
    "ReflectionNode",
    "RunResult",
    "Signature",
    "clean_comment",
]
