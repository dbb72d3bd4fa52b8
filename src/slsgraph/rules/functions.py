"""Lambda functions and Step Functions state machines"""

import json
import logging

from .. import cfn
from ..model import FN, STEP_FN
from ..runtimes import IGNORE_FILENAME
from .base import Rule, collect_statements, register, rule_for

LOG = logging.getLogger(__name__)

# Key of the per-function IAM statements in a function definition
FUNCTION_POLICY_KEY = "iamRoleStatements"

# Plugin that reads FUNCTION_POLICY_KEY; the framework ignores it otherwise
IAM_ROLES_PLUGIN = "serverless-iam-roles-per-function"

HELLO_WORLD_STATE_MACHINE = {
    "Comment": "A Hello World example",
    "StartAt": "HelloWorld",
    "States": {"HelloWorld": {"Type": "Pass", "Result": "Hello World!", "End": True}},
}


def function_resource_name(fn_id: str) -> str:
    """Name of the resource the framework creates for function FN_ID"""
    return f"{fn_id}LambdaFunction"


@register(FN)
class FunctionRule(Rule):
    """A function, and the triggers and permissions from its edges

    Incoming edges are triggers: the rule of the node at the other end adds
    the event. Outgoing edges are permissions: the rule of the node at the
    other end provides the statement.
    """

    def resource(self, ctx, node):
        runtime = ctx.runtime

        if IGNORE_FILENAME not in ctx.files:
            ctx.files[IGNORE_FILENAME] = runtime.ignore_file

        definition = {"handler": runtime.handler_ref(node.id)}
        if node.description:
            definition["description"] = node.description
        ctx.functions[node.id] = definition
        ctx.files[runtime.source_filename(node.id)] = runtime.starting_code

        if node.from_:
            definition["events"] = []
            for source_id in node.from_:
                LOG.debug("Trigger %s -> %s", source_id, node.id)
                rule_for(ctx, source_id).event(ctx, node.id, source_id)

        if node.to:
            statements = collect_statements(ctx, node.id, node.to)
            # Other node types may share this fan-out, and attach the policy
            # themselves
            if ctx.is_function(node.id) and statements:
                definition[FUNCTION_POLICY_KEY] = statements
                plugins = ctx.document.setdefault("plugins", [])
                if IAM_ROLES_PLUGIN not in plugins:
                    plugins.append(IAM_ROLES_PLUGIN)

    # Function to function edges are invocations, not triggers, so there's no
    # event

    def policy(self, ctx, source_id, target_id):
        return cfn.statement(
            ["lambda:InvokeFunction", "lambda:InvokeAsync"],
            cfn.get_att(function_resource_name(target_id)),
        )


@register(STEP_FN)
class StepFunctionRule(Rule):
    def resource(self, ctx, node):
        ctx.resources[node.id] = {
            "Type": "AWS::StepFunctions::StateMachine",
            "Properties": {
                # The console creates this role the first time a state machine
                # is made in a region
                "RoleArn": cfn.join(
                    "arn:aws:iam::",
                    cfn.ACCOUNT_ID,
                    ":role/service-role/StatesExecutionRole-",
                    cfn.REGION,
                ),
                # Must be a string of JSON
                "DefinitionString": json.dumps(HELLO_WORLD_STATE_MACHINE, indent=2),
            },
        }

    def policy(self, ctx, source_id, target_id):
        return cfn.statement(
            [
                "states:DescribeExecution",
                "states:GetExecutionHistory",
                "states:ListExecutions",
                "states:StartExecution",
                "states:StopExecution",
            ],
            [cfn.ref(target_id)],
        )
