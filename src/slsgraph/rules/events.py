"""Event sources: HTTP APIs, schedules and SNS topics"""

from .. import cfn
from ..model import API, SCHEDULE, TOPIC
from .base import Rule, register

PROXY_PATH = "/{proxy+}"

SCHEDULE_RATE = "rate(5 minutes)"


@register(API)
class ApiRule(Rule):
    # No resource - the framework creates the API from the http events
    event_prefix = "Api"

    def function_trigger(self, ctx, source_id):
        return {"http": {"path": PROXY_PATH, "method": "get"}}

    def resource_event(self, ctx, source_id):
        return {"Type": "Api", "Properties": {"Path": PROXY_PATH, "Method": "ANY"}}

    def policy(self, ctx, source_id, target_id):
        return cfn.statement(
            "execute-api:Invoke", cfn.account_region_arn("execute-api", ":*/*/*/*"),
        )


@register(SCHEDULE)
class ScheduleRule(Rule):
    # Nothing to create, and nothing to grant: schedules aren't invoked
    event_prefix = "Schedule"

    def function_trigger(self, ctx, source_id):
        return {"schedule": SCHEDULE_RATE}

    def resource_event(self, ctx, source_id):
        return {"Type": "Schedule", "Properties": {"Schedule": SCHEDULE_RATE}}


@register(TOPIC)
class TopicRule(Rule):
    event_prefix = "Topic"

    def resource(self, ctx, node):
        ctx.resources[node.id] = {"Type": "AWS::SNS::Topic"}

    def function_trigger(self, ctx, source_id):
        return {"sns": source_id}

    def resource_event(self, ctx, source_id):
        return {"Type": "SNS", "Properties": {"Topic": cfn.ref(source_id)}}

    def policy(self, ctx, source_id, target_id):
        # Ref of a topic is its ARN
        return cfn.statement("sns:Publish", cfn.ref(target_id))
