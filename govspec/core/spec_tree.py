from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping

# Nested content keys, visited in this order for every node.
CHILD_KEYS = ("subsections", "elements", "children")

_LABEL_KEYS = ("label", "text", "title", "name", "id", "element_id")


@dataclass(frozen=True)
class NodeSite:
    """One node of a spec tree together with where it was found.

    path is the structural location (sections[0].elements[1]); outline is
    the 1-based nesting number used in rendered documents (1.2).
    """

    section_index: int
    section_id: str
    path: str
    outline: str
    depth: int
    node: Any

    @property
    def is_section(self) -> bool:
        return self.depth == 0

    @property
    def is_mapping(self) -> bool:
        return isinstance(self.node, Mapping)


def get_sections(tree: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    sections = tree.get("sections") if isinstance(tree, Mapping) else None
    if not isinstance(sections, list):
        return []
    return [s for s in sections if isinstance(s, Mapping)]


def node_label(node: Mapping[str, Any]) -> str:
    for key in _LABEL_KEYS:
        value = node.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _walk_children(
    node: Mapping[str, Any],
    *,
    section_index: int,
    section_id: str,
    path: str,
    outline: str,
    depth: int,
) -> Iterator[NodeSite]:
    position = 0
    for key in CHILD_KEYS:
        children = node.get(key)
        if not isinstance(children, list):
            continue
        for i, child in enumerate(children):
            position += 1
            child_path = f"{path}.{key}[{i}]"
            child_outline = f"{outline}.{position}"
            yield NodeSite(
                section_index=section_index,
                section_id=section_id,
                path=child_path,
                outline=child_outline,
                depth=depth + 1,
                node=child,
            )
            if isinstance(child, Mapping):
                yield from _walk_children(
                    child,
                    section_index=section_index,
                    section_id=section_id,
                    path=child_path,
                    outline=child_outline,
                    depth=depth + 1,
                )


def iter_nodes(tree: Mapping[str, Any]) -> Iterator[NodeSite]:
    """Depth-first, order-preserving walk over every section and nested node.

    Non-mapping children are yielded as-is so callers can report them; their
    contents are never descended into.
    """

    for idx, section in enumerate(get_sections(tree)):
        section_id = str(section.get("section_id") or section.get("id") or f"#{idx + 1}")
        path = f"sections[{idx}]"
        outline = str(idx + 1)
        yield NodeSite(
            section_index=idx,
            section_id=section_id,
            path=path,
            outline=outline,
            depth=0,
            node=section,
        )
        yield from _walk_children(
            section,
            section_index=idx,
            section_id=section_id,
            path=path,
            outline=outline,
            depth=0,
        )


def iter_section_nodes(tree: Mapping[str, Any], section_index: int) -> Iterator[NodeSite]:
    for site in iter_nodes(tree):
        if site.section_index == section_index:
            yield site
