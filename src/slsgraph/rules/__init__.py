"""Rules for rendering each type of node

Importing this package registers one rule per node type.
"""

from ..model import NODE_TYPES
from .base import RULES, Rule, collect_statements, get_rule, rule_for
from . import events, functions, identity, iot, storage, streams

_missing = set(NODE_TYPES) - set(RULES)
assert not _missing, f"No rules for node types: {_missing}"
