"""
L1 Domain — special-component dependency graph (pure).

Installers declare their own dependencies; before anything is
installed the orchestrator checks the transitive graph for cycles so a
bad declaration fails fast instead of recursing forever.
No I/O, no subprocess.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable


def collect_graph(
    roots: Iterable[str],
    deps_of: Callable[[str], list[str]],
) -> dict[str, list[str]]:
    """Walk the dependency edges reachable from ``roots``.

    Args:
        roots: Starting component keys.
        deps_of: Returns the special-component dependencies of a key.

    Returns:
        Adjacency map key → dependency keys, covering every reachable key.
    """
    graph: dict[str, list[str]] = {}
    stack = list(roots)
    while stack:
        key = stack.pop()
        if key in graph:
            continue
        deps = list(deps_of(key))
        graph[key] = deps
        stack.extend(d for d in deps if d not in graph)
    return graph


def find_cycle_members(graph: dict[str, list[str]]) -> list[str]:
    """Return the keys that sit on (or behind) a dependency cycle.

    Uses Kahn's algorithm: anything never reaching in-degree zero is
    part of a cycle or depends on one. Empty list means the graph is
    a DAG.
    """
    nodes = set(graph)
    for deps in graph.values():
        nodes.update(deps)

    # Edge dep → dependent; in-degree counts unmet dependencies.
    in_degree: dict[str, int] = {n: 0 for n in nodes}
    dependents: dict[str, list[str]] = {n: [] for n in nodes}
    for key, deps in graph.items():
        for dep in deps:
            in_degree[key] += 1
            dependents[dep].append(key)

    queue = sorted(n for n, deg in in_degree.items() if deg == 0)
    processed: set[str] = set()
    while queue:
        node = queue.pop(0)
        processed.add(node)
        for successor in dependents[node]:
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                queue.append(successor)

    return sorted(nodes - processed)
