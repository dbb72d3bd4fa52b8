"""Hold state in the compilation"""

from dataclasses import dataclass, field
from typing import Dict

from .model import FN, Model, Node
from .runtimes import Runtime, get_runtime

DEFAULT_SERVICE_NAME = "serverless"
DEFAULT_PROVIDER = "aws"


def new_document(
    service_name=DEFAULT_SERVICE_NAME, runtime_id=None, provider=DEFAULT_PROVIDER
) -> dict:
    """The empty deployment descriptor"""
    return {
        "service": service_name,
        "provider": {"name": provider, "runtime": runtime_id},
        "functions": {},
        "resources": {"Resources": {}, "Outputs": {}},
    }


@dataclass
class BuildContext:
    """The document (and scaffold files) being built for one model

    Rules only ever add to this. A new context is made for every compilation.
    """

    model: Model
    runtime_id: str
    document: dict
    files: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, model: Model, runtime_id: str, **kwargs) -> "BuildContext":
        return cls(model, runtime_id, new_document(runtime_id=runtime_id, **kwargs))

    @property
    def runtime(self) -> Runtime:
        return get_runtime(self.runtime_id)

    @property
    def functions(self) -> dict:
        return self.document["functions"]

    @property
    def resources(self) -> dict:
        return self.document["resources"]["Resources"]

    def node(self, node_id: str) -> Node:
        return self.model[node_id]

    def type_of(self, node_id: str) -> str:
        return self.model.type_of(node_id)

    def is_function(self, node_id: str) -> bool:
        return self.type_of(node_id) == FN
