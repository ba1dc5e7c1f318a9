"""Walk the reflection tree and render per-component Markdown fragments."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from .logging import get_logger
from .models import CommentTag, ReflectionKind, ReflectionNode

DEFAULT_MODULE_PREFIX = "MDC"

_SKIPPED_MODULE_KINDS = (ReflectionKind.Variable, ReflectionKind.TypeAlias)
_TABLE_HEADER = "Method Signature | Description \n--- | --- \n"

ReflectionRoot = Union[Mapping[str, Any], Sequence[Mapping[str, Any]], Sequence[ReflectionNode]]


class FragmentBuffer:
    """Ordered mapping of grouping key to the Markdown fragments collected for it."""

    def __init__(self) -> None:
        self._fragments: Dict[str, List[str]] = {}

    def append(self, key: str, fragment: str) -> None:
        """Append ``fragment`` under ``key``, creating the entry on first use."""
        existing = self._fragments.get(key)
        if existing is not None:
            existing.append(fragment)
        else:
            self._fragments[key] = [fragment]

    def get(self, key: str) -> List[str]:
        return list(self._fragments.get(key, []))

    def keys(self) -> List[str]:
        return list(self._fragments)

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for key, fragments in self._fragments.items():
            yield key, list(fragments)

    def __contains__(self, key: object) -> bool:
        return key in self._fragments

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._fragments))


def clean_comment(comment: str) -> str:
    """Replace the first newline with a space.

    Only the first occurrence is replaced; existing READMEs were generated
    with this behaviour.
    """
    return comment.replace("\n", " ", 1)


def component_path_for(section_name: str) -> Tuple[str, str]:
    """Return ``(filepath, grouping key)`` for a file-section name."""
    filepath = section_name.replace('"', "")
    return filepath, filepath.split("/")[0]


class Extractor:
    """Builds a FragmentBuffer from TypeDoc reflection output."""

    def __init__(self, module_prefix: str = DEFAULT_MODULE_PREFIX) -> None:
        self.module_prefix = module_prefix
        self.buffer = FragmentBuffer()
        self.logger = get_logger("extractor")

    def generate_docs(self, root: ReflectionRoot) -> FragmentBuffer:
        """Iterate every file section and collect fragments for public modules."""
        for section in _iter_sections(root):
            filepath, component_path = component_path_for(section.name)
            if not section.children:
                continue
            self.logger.info("-- generating docs for %s", filepath)
            for module in section.children:
                self.generate_docs_for_module(module, component_path)
        return self.buffer

    def generate_docs_for_module(self, module: ReflectionNode, component_path: str) -> None:
        if not module.name.startswith(self.module_prefix):
            # util modules
            return
        if module.kind in _SKIPPED_MODULE_KINDS:
            # constants, strings and type declarations
            self.logger.debug("Skipping %s (%s)", module.name, module.describe()["kind"])
            return

        fragment = self.class_documentation(module) + self.member_table(module)
        self.buffer.append(component_path, fragment)

    def class_documentation(self, module: ReflectionNode) -> str:
        """Render module-level documentation; only ``@fires`` tags are used."""
        if module.comment is None or not module.comment.tags:
            return ""
        tags_by_name: Dict[str, List[CommentTag]] = {}
        for tag in module.comment.tags:
            tags_by_name.setdefault(tag.tag, []).append(tag)

        fires = tags_by_name.get("fires")
        if fires:
            return self.event_comments(fires)
        return ""

    def event_comments(self, tags: Sequence[CommentTag]) -> str:
        lines = ["### Events\n\n"]
        for tag in tags:
            lines.append(f"- {clean_comment(tag.text)}\n")
        return "".join(lines) + "\n"

    def member_table(self, module: ReflectionNode) -> str:
        markdown = f"### {module.name}\n\n" + _TABLE_HEADER
        for member in module.children or []:
            if member.kind in (ReflectionKind.Function, ReflectionKind.Method):
                markdown += self.function_row(member)
            elif member.kind == ReflectionKind.Accessor:
                markdown += self.accessor_row(member)
        return markdown

    def function_row(self, member: ReflectionNode) -> str:
        if not member.signatures:
            return ""
        comment = member.signatures[0].comment
        if comment is None or not comment.short_text:
            return ""
        return f"{member.name} | {clean_comment(comment.short_text)} \n"

    def accessor_row(self, member: ReflectionNode) -> str:
        # Name and description are joined before cleaning, unlike function_row.
        if member.comment is None:
            return ""
        short_text = member.comment.short_text or ""
        return clean_comment(f"{member.name} | {short_text}") + "\n"


def _iter_sections(root: ReflectionRoot) -> Iterator[ReflectionNode]:
    sections: Any = root.get("children") if isinstance(root, Mapping) else root
    if not sections:
        return
    for section in sections:
        if isinstance(section, ReflectionNode):
            yield section
        elif isinstance(section, Mapping):
            yield ReflectionNode.from_dict(section)


__all__ = [
    "DEFAULT_MODULE_PREFIX",
    "Extractor",
    "FragmentBuffer",
    "clean_comment",
    "component_path_for",
]
