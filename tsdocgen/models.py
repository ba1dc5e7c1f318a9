"""Reflection models parsed from TypeDoc JSON output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional


class ReflectionKind(IntEnum):
    """Numeric reflection kinds emitted by TypeDoc."""

    Global = 0
    ExternalModule = 1
    Module = 2
    Enum = 4
    EnumMember = 16
    Variable = 32
    Function = 64
    Class = 128
    Interface = 256
    Constructor = 512
    Property = 1024
    Method = 2048
    CallSignature = 4096
    IndexSignature = 8192
    ConstructorSignature = 16384
    Parameter = 32768
    TypeLiteral = 65536
    TypeParameter = 131072
    Accessor = 262144
    GetSignature = 524288
    SetSignature = 1048576
    ObjectLiteral = 2097152
    TypeAlias = 4194304
    Event = 8388608


@dataclass
class CommentTag:
    """Tagged annotation inside a comment, e.g. ``@fires``."""

    tag: str
    text: str = ""


@dataclass
class Comment:
    """Structured doc comment attached to a reflection or signature."""

    short_text: Optional[str] = None
    text: Optional[str] = None
    tags: List[CommentTag] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> Optional["Comment"]:
        if not isinstance(payload, Mapping):
            return None
        tags: List[CommentTag] = []
        raw_tags = payload.get("tags")
        if isinstance(raw_tags, list):
            for raw in raw_tags:
                if not isinstance(raw, Mapping) or not isinstance(raw.get("tag"), str):
                    continue
                text = raw.get("text")
                tags.append(CommentTag(tag=raw["tag"], text=text if isinstance(text, str) else ""))
        return cls(
            short_text=_as_str(payload.get("shortText")),
            text=_as_str(payload.get("text")),
            tags=tags,
        )


@dataclass
class Signature:
    """Call signature of a function or method."""

    name: str = ""
    comment: Optional[Comment] = None

    @classmethod
    def from_dict(cls, payload: Any) -> Optional["Signature"]:
        if not isinstance(payload, Mapping):
            return None
        return cls(
            name=_as_str(payload.get("name")) or "",
            comment=Comment.from_dict(payload.get("comment")),
        )


@dataclass
class ReflectionNode:
    """A node of the reflection tree (file section, module or member)."""

    name: str
    kind: int = ReflectionKind.Global
    children: Optional[List["ReflectionNode"]] = None
    comment: Optional[Comment] = None
    signatures: Optional[List[Signature]] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ReflectionNode":
        """Build a node from raw JSON, tolerating absent or mistyped fields."""
        children = None
        raw_children = payload.get("children")
        if isinstance(raw_children, list):
            children = [cls.from_dict(child) for child in raw_children if isinstance(child, Mapping)]

        signatures = None
        raw_signatures = payload.get("signatures")
        if isinstance(raw_signatures, list):
            signatures = [
                signature
                for signature in (Signature.from_dict(raw) for raw in raw_signatures)
                if signature is not None
            ]

        return cls(
            name=_as_str(payload.get("name")) or "",
            kind=_as_kind(payload.get("kind")),
            children=children,
            comment=Comment.from_dict(payload.get("comment")),
            signatures=signatures,
        )

    def describe(self) -> Dict[str, Any]:
        """Short summary used in debug logging."""
        return {
            "name": self.name,
            "kind": _kind_label(self.kind),
            "children": len(self.children or []),
        }


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_kind(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return ReflectionKind.Global
    try:
        return ReflectionKind(value)
    except ValueError:
        return value


def _kind_label(kind: int) -> str:
    try:
        return ReflectionKind(kind).name
    except ValueError:
        return str(kind)


__all__ = ["Comment", "CommentTag", "ReflectionKind", "ReflectionNode", "Signature"]
