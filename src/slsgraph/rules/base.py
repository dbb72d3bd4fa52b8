"""The rule interface, and the registry of rules by node type

Each node type has one Rule. The compiler calls `resource' for every node.
Edges are handled by double dispatch on the type of the *other* end:

- the function at the end of an edge calls `event' on the rule of the node
  the edge comes from (the trigger), and
- a node with outgoing permissions calls `policy' on the rule of the node the
  edge goes to (the thing being accessed).
"""

import logging
from typing import Dict, Union

from ..context import BuildContext
from ..exceptions import UnexpectedError
from ..model import Node

LOG = logging.getLogger(__name__)

RULES: Dict[str, "Rule"] = {}


def register(node_type: str):
    """Register a Rule class as the rule for NODE_TYPE"""

    def _register(cls):
        if node_type in RULES:
            raise UnexpectedError(f"Rule for `{node_type}' registered twice")
        cls.node_type = node_type
        RULES[node_type] = cls()
        return cls

    return _register


def get_rule(node_type: str) -> "Rule":
    try:
        return RULES[node_type]
    except KeyError:
        raise UnexpectedError(f"No rule for node type `{node_type}'")


def rule_for(ctx: BuildContext, node_id: str) -> "Rule":
    """The rule for the node with id NODE_ID"""
    return get_rule(ctx.type_of(node_id))


class Rule:
    """Generate the resources, events and policies for one node type"""

    node_type = None

    # Prefix of the key used for events on composite resources
    event_prefix = None

    def resource(self, ctx: BuildContext, node: Node):
        """Add this node's own resources to the document"""

    def event(self, ctx: BuildContext, target_id: str, source_id: str):
        """Wire a SOURCE_ID (this type) -> TARGET_ID trigger into the target"""
        if ctx.is_function(target_id):
            trigger = self.function_trigger(ctx, source_id)
            if trigger is None:
                LOG.debug("%s doesn't trigger functions", self.node_type)
                return
            ctx.functions[target_id].setdefault("events", []).append(trigger)
        else:
            event = self.resource_event(ctx, source_id)
            if event is None:
                LOG.debug("%s doesn't trigger resources", self.node_type)
                return
            properties = ctx.resources[target_id].setdefault("Properties", {})
            events = properties.setdefault("Events", {})
            events[self.event_prefix + source_id] = event

    def function_trigger(self, ctx: BuildContext, source_id: str) -> Union[dict, None]:
        """The event definition for a function triggered by SOURCE_ID"""
        return None

    def resource_event(self, ctx: BuildContext, source_id: str) -> Union[dict, None]:
        """The inline event for a composite resource triggered by SOURCE_ID"""
        return None

    def policy(
        self, ctx: BuildContext, source_id: str, target_id: str
    ) -> Union[dict, None]:
        """Statement allowing SOURCE_ID to use TARGET_ID (this type)

        None if the type can't be used in that way.
        """
        return None

    def __repr__(self):
        return f"<Rule {self.node_type}>"


def collect_statements(ctx: BuildContext, source_id: str, target_ids) -> list:
    """Policy statements allowing SOURCE_ID to use each of TARGET_IDS, in order"""
    statements = []
    for target_id in target_ids:
        LOG.debug("Policy %s -> %s", source_id, target_id)
        stmt = rule_for(ctx, target_id).policy(ctx, source_id, target_id)
        if stmt is None:
            LOG.debug("Nothing to grant on %s", target_id)
            continue
        statements.append(stmt)
    return statements
