"""Immutable class -> service dependency graph with O(1) bidirectional lookups.

Includes cycle detection by depth-first traversal with a recursion stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from dinavigator.domain.model.injection_site import UNKNOWN_CLASS

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """Immutable adjacency of classes to the service types they inject.

    Invariants (FAIL-FIRST):
    - forward successors are distinct and keep first-seen order
    - forward[a] contains b ⟺ reverse[b] contains a
    - UNKNOWN_CLASS is never a node

    Attributes:
        forward: Class name → injected service types (insertion ordered)
        reverse: Service type → classes injecting it
    """

    forward: Mapping[str, tuple[str, ...]]
    reverse: Mapping[str, frozenset[str]]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if UNKNOWN_CLASS in self.forward or UNKNOWN_CLASS in self.reverse:
            raise ValueError(f"'{UNKNOWN_CLASS}' must not be a graph node")

        for node, successors in self.forward.items():
            if len(set(successors)) != len(successors):
                raise ValueError(f"successors of '{node}' must be distinct")
            for succ in successors:
                if node not in self.reverse.get(succ, frozenset()):
                    raise ValueError(
                        f"inconsistent: {node}→{succ} in forward "
                        f"but {node} not in reverse[{succ}]"
                    )

        for node, predecessors in self.reverse.items():
            for pred in predecessors:
                if node not in self.forward.get(pred, ()):
                    raise ValueError(
                        f"inconsistent: {pred}→{node} in reverse "
                        f"but {node} not in forward[{pred}]"
                    )

    def successors(self, node: str) -> tuple[str, ...]:
        """Get service types injected by a class. O(1)."""
        return self.forward.get(node, ())

    def dependents(self, service_type: str) -> frozenset[str]:
        """Get classes injecting a service type. O(1)."""
        return self.reverse.get(service_type, frozenset())

    def has_edge(self, from_: str, to: str) -> bool:
        """Check if edge exists."""
        return to in self.forward.get(from_, ())

    @property
    def nodes(self) -> tuple[str, ...]:
        """All nodes: classes first, then service types, in first-seen order."""
        ordered = dict.fromkeys(self.forward)
        for successors in self.forward.values():
            ordered.update(dict.fromkeys(successors))
        return tuple(ordered)

    @property
    def edge_count(self) -> int:
        """Get total number of edges."""
        return sum(len(succs) for succs in self.forward.values())

    @property
    def node_count(self) -> int:
        """Get total number of nodes."""
        return len(self.nodes)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[str, str]]) -> DependencyGraph:
        """Build graph from (class, service_type) edges.

        Edges whose class is UNKNOWN_CLASS are dropped; duplicates collapse.

        Args:
            edges: Iterable of (class_name, service_type) tuples

        Returns:
            DependencyGraph with edges in first-seen order

        Time: O(E) where E is number of edges
        """
        forward: dict[str, dict[str, None]] = {}
        reverse: dict[str, set[str]] = {}

        for class_name, service_type in edges:
            if class_name == UNKNOWN_CLASS:
                continue
            forward.setdefault(class_name, {})[service_type] = None
            reverse.setdefault(service_type, set()).add(class_name)

        return cls(
            forward=MappingProxyType({k: tuple(v) for k, v in forward.items()}),
            reverse=MappingProxyType({k: frozenset(v) for k, v in reverse.items()}),
        )

    @classmethod
    def empty(cls) -> DependencyGraph:
        """Create empty graph with no nodes or edges."""
        return cls(forward=MappingProxyType({}), reverse=MappingProxyType({}))


# =============================================================================
# CYCLE DETECTION
# =============================================================================


def find_cycles(
    graph: DependencyGraph,
    implementations: Mapping[str, tuple[str, ...]] | None = None,
) -> tuple[str, ...]:
    """Detect cycles by depth-first traversal from every node.

    Keeps a visited set shared across traversals and a recursion stack per
    traversal. A neighbor already on the recursion stack closes a cycle;
    each distinct set of participating nodes is reported once.

    Args:
        graph: Dependency graph to check
        implementations: Service type → registered implementation classes.
            When given, a service type also leads to its implementations,
            so cycles through interfaces are found.

    Returns:
        Cycle descriptions in discovery order, e.g.
        "Cycle detected involving A: A -> B -> A". Empty if acyclic.
    """
    resolved = implementations or {}

    def neighbors(node: str) -> tuple[str, ...]:
        result = dict.fromkeys(graph.successors(node))
        for impl in resolved.get(node, ()):
            if impl != node and impl != UNKNOWN_CLASS:
                result[impl] = None
        return tuple(result)

    visited: set[str] = set()
    reported: set[frozenset[str]] = set()
    cycles: list[str] = []

    for root in graph.nodes:
        if root in visited:
            continue
        visited.add(root)
        path = [root]
        on_path = {root}
        pending = [iter(neighbors(root))]

        while pending:
            nxt = next(pending[-1], None)
            if nxt is None:
                on_path.discard(path.pop())
                pending.pop()
                continue
            if nxt in on_path:
                chain = [*path[path.index(nxt) :], nxt]
                key = frozenset(chain)
                if key not in reported:
                    reported.add(key)
                    cycles.append(f"Cycle detected involving {nxt}: {' -> '.join(chain)}")
                continue
            if nxt in visited:
                continue
            visited.add(nxt)
            path.append(nxt)
            on_path.add(nxt)
            pending.append(iter(neighbors(nxt)))

    return tuple(cycles)
