"""The architecture graph: typed nodes connected by directed edges

Edges are stored on both ends - a node's `from_` lists the nodes with an edge
into it, and `to` the nodes it has an edge to. The meaning of an edge depends
only on the types of the two nodes it connects.

No referential integrity checks are done here. Every id in `from_` and `to`
is assumed to exist in the model.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, Tuple, Union

from .exceptions import ModelError

LOG = logging.getLogger(__name__)

BUCKET = "bucket"
TABLE = "table"
API = "api"
STREAM = "stream"
DELIVERY_STREAM = "deliveryStream"
ANALYTICS_STREAM = "analyticsStream"
SCHEDULE = "schedule"
TOPIC = "topic"
FN = "fn"
STEP_FN = "stepFn"
COGNITO_IDENTITY = "cognitoIdentity"
IOT_RULE = "iotRule"

NODE_TYPES = (
    BUCKET,
    TABLE,
    API,
    STREAM,
    DELIVERY_STREAM,
    ANALYTICS_STREAM,
    SCHEDULE,
    TOPIC,
    FN,
    STEP_FN,
    COGNITO_IDENTITY,
    IOT_RULE,
)


@dataclass(frozen=True)
class Node:
    id: str
    type: str
    description: str = ""
    from_: Tuple[str, ...] = ()
    to: Tuple[str, ...] = ()

    def __post_init__(self):
        # lists are not hashable
        object.__setattr__(self, "from_", tuple(self.from_))
        object.__setattr__(self, "to", tuple(self.to))

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        if not isinstance(data, dict):
            raise ModelError(
                f"Node {data!r} is not an object",
                'Nodes look like: {"id": "myFn", "type": "fn", "from": [], "to": []}',
            )
        try:
            return cls(
                id=data["id"],
                type=data["type"],
                description=data.get("description") or "",
                from_=data.get("from", ()),
                to=data.get("to", ()),
            )
        except KeyError as exc:
            raise ModelError(
                f"Node {data} has no `{exc.args[0]}'",
                "Every node needs at least an `id' and a `type'.",
            )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "description": self.description,
            "from": list(self.from_),
            "to": list(self.to),
        }


@dataclass
class Model:
    nodes: Dict[str, Node] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, node_id: str) -> Node:
        return self.nodes[node_id]

    def type_of(self, node_id: str) -> str:
        return self.nodes[node_id].type

    @classmethod
    def from_dict(cls, data: dict) -> "Model":
        """Build a model from its JSON form

        `nodes' may be a mapping of id -> node or a list of nodes. Order is
        preserved either way.
        """
        if not isinstance(data, dict) or "nodes" not in data:
            raise ModelError(
                "No `nodes' in the model",
                'Models look like: {"nodes": {"myFn": {"id": "myFn", "type": "fn"}}}',
            )

        raw = data["nodes"]
        if isinstance(raw, dict):
            raw = list(raw.values())

        nodes = {}
        for item in raw:
            node = Node.from_dict(item)
            nodes[node.id] = node
        LOG.debug("Loaded %d nodes", len(nodes))
        return cls(nodes)

    def to_dict(self) -> dict:
        return {"nodes": {n.id: n.to_dict() for n in self}}


def load_model(filename: Union[str, Path]) -> Model:
    """Load a model from a JSON file"""
    filename = Path(filename)
    try:
        with open(filename) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ModelError(f"{filename} not found", "Check the model path.")
    except json.JSONDecodeError as exc:
        raise ModelError(f"{filename} is not valid JSON ({exc})", "Fix the syntax.")

    LOG.info("Loading model from %s", filename)
    return Model.from_dict(data)
