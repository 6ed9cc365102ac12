# app/services/deletion_planner.py
"""
Deletion / insertion ordering over the entity graph.

Kahn's algorithm with a heap keyed on declaration index, so the same graph
always gives the same plan. Dependents come strictly before their parents.
"""

from __future__ import annotations

import heapq
import logging

from app.core.entity_graph import DEFAULT_GRAPH, EntityGraph, EntityType
from app.core.errors import DeletionPlanError

logger = logging.getLogger(__name__)


def plan_deletion_order(graph: EntityGraph = DEFAULT_GRAPH) -> list[EntityType]:
    """
    Return every node of the graph, children before parents.

    Raises DeletionPlanError if the edges form a cycle or point outside the
    node list.
    """
    index = {node: i for i, node in enumerate(graph.nodes)}
    if len(index) != len(graph.nodes):
        raise DeletionPlanError(
            "Invalid deletion plan",
            "Entity graph declares the same entity type more than once.",
        )

    # A parent becomes deletable once all of its dependents are gone.
    pending_dependents: dict[EntityType, int] = {node: 0 for node in graph.nodes}
    parents_of: dict[EntityType, list[EntityType]] = {node: [] for node in graph.nodes}
    for edge in graph.edges:
        if edge.parent not in index or edge.dependent not in index:
            raise DeletionPlanError(
                "Invalid deletion plan",
                f"Edge {edge.parent.value} -> {edge.dependent.value} references an unknown entity type.",
            )
        if edge.parent in parents_of[edge.dependent]:
            continue
        parents_of[edge.dependent].append(edge.parent)
        pending_dependents[edge.parent] += 1

    ready = [(index[node], node) for node, n in pending_dependents.items() if n == 0]
    heapq.heapify(ready)

    order: list[EntityType] = []
    while ready:
        _, node = heapq.heappop(ready)
        order.append(node)
        for parent in parents_of[node]:
            pending_dependents[parent] -= 1
            if pending_dependents[parent] == 0:
                heapq.heappush(ready, (index[parent], parent))

    if len(order) != len(graph.nodes):
        stuck = sorted((n for n in graph.nodes if n not in order), key=index.__getitem__)
        names = ", ".join(n.value for n in stuck)
        logger.error("Entity graph has a cycle among: %s", names)
        raise DeletionPlanError(
            "Invalid deletion plan",
            f"Entity graph contains a cycle involving: {names}.",
        )

    return order


def plan_insertion_order(graph: EntityGraph = DEFAULT_GRAPH) -> list[EntityType]:
    """
    Parents before children: the deletion plan reversed.
    """
    return list(reversed(plan_deletion_order(graph)))
