"""Structural queries over a GraphModel: entry points and acyclicity."""

from collections import deque

from designer.errors import CycleDetected
from designer.graph.model import GraphModel


def source_nodes(graph: GraphModel) -> list[str]:
    """Ids of nodes with no incoming edges, in node order."""
    counts = graph.incoming_counts()
    return [node.id for node in graph.nodes if counts[node.id] == 0]


def sink_nodes(graph: GraphModel) -> list[str]:
    """Ids of nodes with no outgoing edges, in node order."""
    has_outgoing = {edge.source for edge in graph.edges}
    return [node.id for node in graph.nodes if node.id not in has_outgoing]


def entry_point(graph: GraphModel) -> str | None:
    """Where a walk starts: the first source node, else the first node, else None."""
    sources = source_nodes(graph)
    if sources:
        return sources[0]
    nodes = graph.nodes
    return nodes[0].id if nodes else None


def topological_order(graph: GraphModel) -> list[str]:
    """Kahn's algorithm over node ids.

    Raises CycleDetected naming every node that sits on, or downstream of,
    a cycle (the nodes Kahn could never release).
    """
    in_degree = graph.incoming_counts()
    children: dict[str, list[str]] = {node_id: [] for node_id in in_degree}
    for edge in graph.edges:
        children[edge.source].append(edge.target)

    queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
    order = []
    while queue:
        node_id = queue.popleft()
        order.append(node_id)
        for child in children[node_id]:
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    if len(order) != len(in_degree):
        stuck = [node_id for node_id, degree in in_degree.items() if degree > 0]
        raise CycleDetected(stuck)
    return order


def check_acyclic(graph: GraphModel) -> None:
    """Raise CycleDetected if the graph has a directed cycle."""
    topological_order(graph)
