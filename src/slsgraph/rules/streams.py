"""Kinesis streams, Firehose delivery streams and Analytics applications"""

import logging

from .. import cfn
from ..model import ANALYTICS_STREAM, BUCKET, DELIVERY_STREAM, FN, STREAM
from .base import Rule, register
from .functions import function_resource_name
from .storage import STREAM_BATCH_SIZE, STREAM_STARTING_POSITION

LOG = logging.getLogger(__name__)

SHARD_COUNT = 1

FIREHOSE_BUFFER_SECONDS = 60
FIREHOSE_BUFFER_MB = 50
FIREHOSE_PREFIX = "firehose/"

FIREHOSE_BUCKET_ACTIONS = [
    "s3:AbortMultipartUpload",
    "s3:GetBucketLocation",
    "s3:GetObject",
    "s3:ListBucket",
    "s3:ListBucketMultipartUploads",
    "s3:PutObject",
]


def _find_last(ctx, node_ids, node_type):
    """The last of NODE_IDS with type NODE_TYPE, or None"""
    found = None
    for node_id in node_ids:
        if ctx.type_of(node_id) == node_type:
            found = node_id
    return found


@register(STREAM)
class StreamRule(Rule):
    event_prefix = "Stream"

    def resource(self, ctx, node):
        ctx.resources[node.id] = {
            "Type": "AWS::Kinesis::Stream",
            "Properties": {"ShardCount": SHARD_COUNT},
        }

    def function_trigger(self, ctx, source_id):
        return {"stream": {"type": "kinesis", "arn": cfn.get_att(source_id)}}

    def resource_event(self, ctx, source_id):
        return {
            "Type": "Kinesis",
            "Properties": {
                "Stream": cfn.get_att(source_id),
                "StartingPosition": STREAM_STARTING_POSITION,
                "BatchSize": STREAM_BATCH_SIZE,
            },
        }

    def policy(self, ctx, source_id, target_id):
        return cfn.statement(
            ["kinesis:PutRecord", "kinesis:PutRecords"], cfn.get_att(target_id)
        )


@register(DELIVERY_STREAM)
class DeliveryStreamRule(Rule):
    """A Firehose delivery stream into a bucket

    Needs exactly one outgoing edge to a bucket. An outgoing edge to a
    function makes that function a record transformer.
    """

    def resource(self, ctx, node):
        bucket_id = _find_last(ctx, node.to, BUCKET)
        fn_id = _find_last(ctx, node.to, FN)

        if bucket_id is None:
            # Not fatal - the rest of the document is still usable
            LOG.error("Delivery Stream %s without a destination bucket", node.id)
            return

        role_id = node.id + "DeliveryRole"
        policy_id = node.id + "DeliveryPolicy"

        destination = {
            "BucketARN": cfn.get_att(bucket_id),
            "BufferingHints": {
                "IntervalInSeconds": FIREHOSE_BUFFER_SECONDS,
                "SizeInMBs": FIREHOSE_BUFFER_MB,
            },
            "CompressionFormat": "UNCOMPRESSED",
            "Prefix": FIREHOSE_PREFIX,
            "RoleARN": cfn.get_att(role_id),
        }
        if fn_id is not None:
            destination["ProcessingConfiguration"] = {
                "Enabled": True,
                "Processors": [
                    {
                        "Parameters": [
                            {
                                "ParameterName": "LambdaArn",
                                "ParameterValue": cfn.ref(
                                    function_resource_name(fn_id)
                                ),
                            }
                        ],
                        "Type": "Lambda",
                    }
                ],
            }

        ctx.resources[node.id] = {
            "DependsOn": [policy_id],
            "Type": "AWS::KinesisFirehose::DeliveryStream",
            "Properties": {"ExtendedS3DestinationConfiguration": destination},
        }
        ctx.resources[role_id] = cfn.role(
            cfn.assume_role_document(
                {"Service": "firehose.amazonaws.com"},
                condition={"StringEquals": {"sts:ExternalId": cfn.ACCOUNT_ID}},
            )
        )
        ctx.resources[policy_id] = cfn.role_policy(
            "firehose_delivery_policy",
            role_id,
            [cfn.statement(FIREHOSE_BUCKET_ACTIONS, cfn.get_att(bucket_id))],
        )

    def policy(self, ctx, source_id, target_id):
        return cfn.statement(
            ["firehose:PutRecord", "firehose:PutRecordBatch"],
            cfn.firehose_arn(target_id),
        )


@register(ANALYTICS_STREAM)
class AnalyticsStreamRule(Rule):
    """A Kinesis Analytics application

    Reads from at most one stream and one delivery stream, and writes to at
    most one of each. Any of them may be missing.
    """

    def resource(self, ctx, node):
        input_stream_id = _find_last(ctx, node.from_, STREAM)
        input_delivery_id = _find_last(ctx, node.from_, DELIVERY_STREAM)
        output_stream_id = _find_last(ctx, node.to, STREAM)
        output_delivery_id = _find_last(ctx, node.to, DELIVERY_STREAM)

        role_id = node.id + "Role"
        outputs_id = node.id + "Outputs"
        role_arn = cfn.get_att(role_id)

        app_input = {
            "NamePrefix": "exampleNamePrefix",
            "InputSchema": {
                "RecordColumns": [
                    {
                        "Name": "example",
                        "SqlType": "VARCHAR(16)",
                        "Mapping": "$.example",
                    }
                ],
                "RecordFormat": {
                    "RecordFormatType": "JSON",
                    "MappingParameters": {
                        "JSONMappingParameters": {"RecordRowPath": "$"}
                    },
                },
            },
        }
        if input_stream_id is not None:
            app_input["KinesisStreamsInput"] = {
                "ResourceARN": cfn.get_att(input_stream_id),
                "RoleARN": role_arn,
            }
        if input_delivery_id is not None:
            app_input["KinesisFirehoseInput"] = {
                "ResourceARN": cfn.firehose_arn(input_delivery_id),
                "RoleARN": role_arn,
            }

        properties = {"ApplicationName": node.id, "Inputs": [app_input]}
        if node.description:
            properties["ApplicationDescription"] = node.description

        ctx.resources[node.id] = {
            "Type": "AWS::KinesisAnalytics::Application",
            "Properties": properties,
        }

        # Wide open, so one role covers every input and output
        ctx.resources[role_id] = cfn.role(
            cfn.assume_role_document({"Service": "kinesisanalytics.amazonaws.com"}),
            Path="/",
            Policies=[
                {
                    "PolicyName": "Open",
                    "PolicyDocument": cfn.policy_document(
                        [cfn.statement("*", "*")]
                    ),
                }
            ],
        )

        output = {
            "Name": "exampleOutput",
            "DestinationSchema": {"RecordFormatType": "CSV"},
        }
        if output_stream_id is not None:
            output["KinesisStreamsOutput"] = {
                "ResourceARN": cfn.get_att(output_stream_id),
                "RoleARN": role_arn,
            }
        if output_delivery_id is not None:
            output["KinesisFirehoseOutput"] = {
                "ResourceARN": cfn.firehose_arn(output_delivery_id),
                "RoleARN": role_arn,
            }

        ctx.resources[outputs_id] = {
            "Type": "AWS::KinesisAnalytics::ApplicationOutput",
            "DependsOn": node.id,
            "Properties": {"ApplicationName": cfn.ref(node.id), "Output": output},
        }
