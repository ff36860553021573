"""Component hierarchy (project → module → directory → file).

Components are stored in an arena keyed by their integer reference. Each
component holds the refs of its children in declaration order; parent links
are derived once when the tree is built.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from loguru import logger

from .exceptions import ComponentTreeError


class ComponentType(str, Enum):
    """Kind of node in the component tree."""

    PROJECT = "PROJECT"
    MODULE = "MODULE"
    DIRECTORY = "DIRECTORY"
    FILE = "FILE"

    @property
    def is_leaf(self) -> bool:
        return self is ComponentType.FILE

    @classmethod
    def parse(cls, value: str | ComponentType) -> ComponentType:
        """Parse a component type, case-insensitively."""
        if isinstance(value, ComponentType):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ComponentTreeError(
                f"Unknown component type: {value!r}", {"type": value}
            ) from None


@dataclass(frozen=True)
class Component:
    """A single node of the component tree.

    Attributes:
        ref: Stable integer reference, unique within the tree
        type: Component type
        children: Refs of direct children, in declaration order
        key: Optional display key (e.g. "org.acme:core:src/Main.java")
    """

    ref: int
    type: ComponentType
    children: tuple[int, ...] = ()
    key: str | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children


class ComponentTree:
    """Immutable, validated component hierarchy.

    Use :class:`ComponentTreeBuilder` or :meth:`from_dict` to create one.
    """

    def __init__(self, components: dict[int, Component], root: int) -> None:
        self._components = components
        self._root = root
        self._parents: dict[int, int] = {
            child: component.ref
            for component in components.values()
            for child in component.children
        }
        self._post_order = self._compute_post_order()

    @property
    def root(self) -> Component:
        return self._components[self._root]

    def get(self, ref: int) -> Component:
        try:
            return self._components[ref]
        except KeyError:
            raise ComponentTreeError(
                f"Component {ref} is not part of the tree", {"ref": ref}
            ) from None

    def __contains__(self, ref: object) -> bool:
        return ref in self._components

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._post_order)

    def children_of(self, ref: int) -> list[Component]:
        return [self._components[child] for child in self.get(ref).children]

    def parent_of(self, ref: int) -> Component | None:
        """Return the parent component, or None for the root."""
        self.get(ref)
        parent = self._parents.get(ref)
        return self._components[parent] if parent is not None else None

    def depth_of(self, ref: int) -> int:
        """Number of edges between the root and the component."""
        depth = 0
        current = self._parents.get(self.get(ref).ref)
        while current is not None:
            depth += 1
            current = self._parents.get(current)
        return depth

    def post_order(self) -> list[Component]:
        """Components with every child before its parent, root last.

        Siblings keep their declaration order.
        """
        return list(self._post_order)

    def pre_order(self) -> list[Component]:
        """Components with every parent before its children, root first."""
        ordered: list[Component] = []
        stack = [self._root]
        while stack:
            component = self._components[stack.pop()]
            ordered.append(component)
            stack.extend(reversed(component.children))
        return ordered

    def _compute_post_order(self) -> list[Component]:
        # Iterative so deep trees do not hit the recursion limit
        ordered: list[Component] = []
        stack: list[tuple[int, bool]] = [(self._root, False)]
        while stack:
            ref, expanded = stack.pop()
            component = self._components[ref]
            if expanded:
                ordered.append(component)
                continue
            stack.append((ref, True))
            for child in reversed(component.children):
                stack.append((child, False))
        return ordered

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ComponentTree:
        """Build a tree from a nested mapping.

        Each level is ``{"ref": int, "type": str, "key": str?, "children": [...]}``.

        Args:
            data: Root component mapping

        Returns:
            Validated ComponentTree
        """
        builder = ComponentTreeBuilder()
        stack = [data]
        while stack:
            node = stack.pop()
            if not isinstance(node, Mapping):
                raise ComponentTreeError(
                    f"Component definition must be a mapping, got {type(node).__name__}"
                )
            if "ref" not in node or "type" not in node:
                raise ComponentTreeError(
                    "Component definition requires 'ref' and 'type'",
                    {"component": dict(node)},
                )
            children = node.get("children") or []
            if not isinstance(children, list) or not all(
                isinstance(child, Mapping) for child in children
            ):
                raise ComponentTreeError(
                    f"Children of component {node['ref']!r} must be a list of "
                    "component mappings",
                    {"ref": node["ref"]},
                )
            builder.add(
                _parse_ref(node["ref"]),
                node["type"],
                children=[_parse_ref(child.get("ref")) for child in children],
                key=node.get("key"),
            )
            stack.extend(children)
        return builder.build()

    def to_dict(self) -> dict[str, Any]:
        """Nested mapping accepted by :meth:`from_dict`."""

        def _node(ref: int) -> dict[str, Any]:
            component = self._components[ref]
            data: dict[str, Any] = {"ref": component.ref, "type": component.type.value}
            if component.key is not None:
                data["key"] = component.key
            if component.children:
                data["children"] = [_node(child) for child in component.children]
            return data

        return _node(self._root)


def _parse_ref(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise ComponentTreeError(f"Invalid component ref: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ComponentTreeError(f"Invalid component ref: {value!r}") from None


@dataclass
class ComponentTreeBuilder:
    """Collects component declarations and validates them into a tree.

    Example:
        builder = ComponentTreeBuilder()
        builder.add(1, ComponentType.PROJECT, children=[12])
        builder.add(12, ComponentType.DIRECTORY, children=[121, 122])
        builder.add(121, ComponentType.FILE)
        builder.add(122, ComponentType.FILE)
        tree = builder.build()
    """

    _components: dict[int, Component] = field(default_factory=dict)

    def add(
        self,
        ref: int,
        type: ComponentType | str,
        children: list[int] | tuple[int, ...] = (),
        key: str | None = None,
    ) -> ComponentTreeBuilder:
        if ref in self._components:
            raise ComponentTreeError(f"Duplicate component ref: {ref}", {"ref": ref})

        component_type = ComponentType.parse(type)
        children = tuple(children)
        if component_type.is_leaf and children:
            raise ComponentTreeError(
                f"FILE component {ref} cannot have children", {"ref": ref}
            )

        self._components[ref] = Component(
            ref=ref, type=component_type, children=children, key=key
        )
        return self

    def build(self) -> ComponentTree:
        """Validate the declared components and return the tree.

        Raises:
            ComponentTreeError: If the components do not form a single tree
        """
        if not self._components:
            raise ComponentTreeError("Component tree is empty")

        parents: dict[int, int] = {}
        for component in self._components.values():
            for child in component.children:
                if child not in self._components:
                    raise ComponentTreeError(
                        f"Component {component.ref} references unknown child {child}",
                        {"ref": component.ref, "child": child},
                    )
                if child in parents:
                    raise ComponentTreeError(
                        f"Component {child} has more than one parent "
                        f"({parents[child]} and {component.ref})",
                        {"ref": child},
                    )
                parents[child] = component.ref

        roots = [ref for ref in self._components if ref not in parents]
        if len(roots) != 1:
            raise ComponentTreeError(
                f"Component tree must have exactly one root, found {len(roots)}",
                {"roots": roots},
            )

        # With one parent per node and a single root, any node unreachable
        # from the root sits on a cycle.
        reachable = 0
        stack = [roots[0]]
        while stack:
            reachable += 1
            stack.extend(self._components[stack.pop()].children)
        if reachable != len(self._components):
            raise ComponentTreeError("Component tree contains a cycle")

        logger.debug(
            f"Built component tree with {len(self._components)} components "
            f"(root={roots[0]})"
        )
        return ComponentTree(dict(self._components), roots[0])
