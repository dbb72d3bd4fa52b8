"""IoT topic rules"""

import logging

from .. import cfn
from ..exceptions import UnsupportedConnection
from ..model import FN, IOT_RULE
from .base import Rule, register
from .functions import function_resource_name

LOG = logging.getLogger(__name__)

# Placeholders, to be edited after generation
RULE_SQL = "SELECT temp FROM 'Some/Topic' WHERE temp > 60"
REPUBLISH_TOPIC = "Output/Topic"
REPUBLISH_TOPIC_ARN_SUFFIX = ":topic/Output/*"


def republish_role(topic_arn_suffix=REPUBLISH_TOPIC_ARN_SUFFIX) -> dict:
    """A role IoT can assume to publish to the output topics"""
    return cfn.role(
        cfn.assume_role_document(
            {"Service": ["iot.amazonaws.com"]}, action=["sts:AssumeRole"]
        ),
        Policies=[
            {
                "PolicyName": "publish",
                "PolicyDocument": cfn.policy_document(
                    [
                        cfn.statement(
                            "iot:Publish",
                            cfn.account_region_arn("iot", topic_arn_suffix),
                        )
                    ]
                ),
            }
        ],
    )


@register(IOT_RULE)
class IotRuleRule(Rule):
    """A topic rule, with one action per outgoing edge

    Only functions (invoke) and other topic rules (republish) can be
    targets. Anything else stops the compilation.
    """

    def resource(self, ctx, node):
        payload = {"RuleDisabled": "true", "Sql": RULE_SQL, "Actions": []}
        if node.description:
            payload["Description"] = node.description

        ctx.resources[node.id] = {
            "Type": "AWS::IoT::TopicRule",
            "Properties": {"TopicRulePayload": payload},
        }

        for target_id in node.to:
            target_type = ctx.type_of(target_id)
            LOG.debug("Action %s -> %s (%s)", node.id, target_id, target_type)

            if target_type == FN:
                payload["Actions"].append(
                    {
                        "Lambda": {
                            "FunctionArn": cfn.get_att(
                                function_resource_name(target_id)
                            )
                        }
                    }
                )

            elif target_type == IOT_RULE:
                role_id = target_id + "PublishRole"
                payload["Actions"].append(
                    {
                        "Republish": {
                            "Topic": REPUBLISH_TOPIC,
                            "RoleArn": cfn.get_att(role_id),
                        }
                    }
                )
                ctx.resources[role_id] = republish_role()

            else:
                raise UnsupportedConnection(
                    f"{node.id} -> {target_id}: IoT rules can't target "
                    f"`{target_type}' nodes (connection type not supported)",
                    "IoT rules can only connect to `fn' or `iotRule' nodes.",
                )
