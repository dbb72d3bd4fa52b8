"""S3 buckets and DynamoDB tables"""

from .. import cfn
from ..model import BUCKET, TABLE
from .base import Rule, register

S3_OBJECT_CREATED = "s3:ObjectCreated:*"

# Granted to composite resources triggered by a bucket. A policy scoped to
# the bucket would create a circular dependency.
S3_READ_ONLY_POLICY = "AmazonS3ReadOnlyAccess"

STREAM_BATCH_SIZE = 10
STREAM_STARTING_POSITION = "TRIM_HORIZON"


@register(BUCKET)
class BucketRule(Rule):
    event_prefix = "Bucket"

    def resource(self, ctx, node):
        ctx.resources[node.id] = {"Type": "AWS::S3::Bucket"}

    def event(self, ctx, target_id, source_id):
        super().event(ctx, target_id, source_id)
        if not ctx.is_function(target_id):
            properties = ctx.resources[target_id]["Properties"]
            properties.setdefault("Policies", []).append(S3_READ_ONLY_POLICY)

    def function_trigger(self, ctx, source_id):
        return {"s3": {"bucket": source_id, "event": S3_OBJECT_CREATED}}

    def resource_event(self, ctx, source_id):
        return {
            "Type": "S3",
            "Properties": {"Bucket": cfn.ref(source_id), "Events": S3_OBJECT_CREATED},
        }

    def policy(self, ctx, source_id, target_id):
        # Object actions apply to the keys, not the bucket itself
        return cfn.statement(
            ["s3:GetObject", "s3:PutObject"], cfn.join(cfn.get_att(target_id), "/*"),
        )


@register(TABLE)
class TableRule(Rule):
    event_prefix = "Table"

    def resource(self, ctx, node):
        ctx.resources[node.id] = {
            "Type": "AWS::DynamoDB::Table",
            "Properties": {
                "AttributeDefinitions": [
                    {"AttributeName": "id", "AttributeType": "S"},
                    {"AttributeName": "version", "AttributeType": "N"},
                ],
                "KeySchema": [
                    {"AttributeName": "id", "KeyType": "HASH"},
                    {"AttributeName": "version", "KeyType": "RANGE"},
                ],
                "BillingMode": "PAY_PER_REQUEST",
                "StreamSpecification": {"StreamViewType": "NEW_AND_OLD_IMAGES"},
            },
        }

    def function_trigger(self, ctx, source_id):
        return {
            "stream": {
                "type": "dynamodb",
                "arn": cfn.get_att(source_id, "StreamArn"),
            }
        }

    def resource_event(self, ctx, source_id):
        return {
            "Type": "DynamoDB",
            "Properties": {
                "Stream": cfn.get_att(source_id, "StreamArn"),
                "StartingPosition": STREAM_STARTING_POSITION,
                "BatchSize": STREAM_BATCH_SIZE,
            },
        }

    def policy(self, ctx, source_id, target_id):
        return cfn.statement(
            ["dynamodb:GetItem", "dynamodb:PutItem"], cfn.get_att(target_id)
        )
