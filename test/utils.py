"""Shared test utilities"""

from collections import defaultdict

from slsgraph.context import BuildContext
from slsgraph.model import Model, Node


def make_model(types: dict, edges=(), descriptions=None) -> Model:
    """Make a model from {id: type} and a list of (from, to) edges"""
    descriptions = descriptions or {}
    froms = defaultdict(list)
    tos = defaultdict(list)
    for a, b in edges:
        tos[a].append(b)
        froms[b].append(a)
    return Model(
        {
            node_id: Node(
                node_id,
                node_type,
                descriptions.get(node_id, ""),
                froms[node_id],
                tos[node_id],
            )
            for node_id, node_type in types.items()
        }
    )


def make_context(model: Model, runtime_id="nodejs8.10") -> BuildContext:
    return BuildContext.create(model, runtime_id)
