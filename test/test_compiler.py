"""Test compiling whole models"""
import logging

import pytest
import yaml

from slsgraph.compiler import DESCRIPTOR_FILENAME, compile_model, render
from slsgraph.exceptions import UnknownRuntime, UnsupportedConnection

from utils import make_model

EVERYTHING = make_model(
    {
        "uploads": "bucket",
        "items": "table",
        "api": "api",
        "clicks": "stream",
        "archive": "deliveryStream",
        "archiveBucket": "bucket",
        "stats": "analyticsStream",
        "cron": "schedule",
        "alerts": "topic",
        "worker": "fn",
        "flow": "stepFn",
        "visitors": "cognitoIdentity",
        "hot": "iotRule",
    },
    [
        ("uploads", "worker"),
        ("items", "worker"),
        ("api", "worker"),
        ("cron", "worker"),
        ("alerts", "worker"),
        ("worker", "items"),
        ("worker", "alerts"),
        ("worker", "flow"),
        ("worker", "archive"),
        ("archive", "archiveBucket"),
        ("clicks", "stats"),
        ("stats", "archive"),
        ("visitors", "clicks"),
        ("hot", "worker"),
    ],
)


def test_skeleton():
    ctx = compile_model(make_model({}), "python3.7", service_name="shop")
    assert ctx.document == {
        "service": "shop",
        "provider": {"name": "aws", "runtime": "python3.7"},
        "functions": {},
        "resources": {"Resources": {}, "Outputs": {}},
    }
    assert ctx.files == {}


def test_single_function():
    files = render(make_model({"hello": "fn"}), "nodejs8.10")
    assert set(files) == {DESCRIPTOR_FILENAME, "hello.js", ".gitignore"}

    doc = yaml.safe_load(files[DESCRIPTOR_FILENAME])
    assert doc["provider"]["runtime"] == "nodejs8.10"
    assert doc["functions"] == {"hello": {"handler": "hello.handler"}}
    assert doc["resources"]["Resources"] == {}


def test_bucket_triggers_function():
    model = make_model(
        {"uploads": "bucket", "resize": "fn"},
        [("uploads", "resize"), ("resize", "uploads")],
    )
    ctx = compile_model(model, "python3.7")
    fn = ctx.functions["resize"]
    assert fn["events"] == [
        {"s3": {"bucket": "uploads", "event": "s3:ObjectCreated:*"}}
    ]
    [stmt] = fn["iamRoleStatements"]
    assert stmt["Action"] == ["s3:GetObject", "s3:PutObject"]
    assert stmt["Resource"]["Fn::Join"][1][0] == {"Fn::GetAtt": ["uploads", "Arn"]}
    assert "resize.py" in ctx.files


def test_delivery_stream_without_bucket_is_skipped(caplog):
    model = make_model(
        {"firehose": "deliveryStream", "f": "fn", "t": "topic"},
        [("firehose", "f")],
    )
    with caplog.at_level(logging.ERROR):
        files = render(model, "nodejs8.10")
    doc = yaml.safe_load(files[DESCRIPTOR_FILENAME])
    assert set(doc["resources"]["Resources"]) == {"t"}
    assert "f" in doc["functions"]
    assert "firehose" in caplog.text


def test_iot_rule_to_table_is_fatal():
    model = make_model({"r": "iotRule", "t": "table"}, [("r", "t")])
    with pytest.raises(UnsupportedConnection) as exc:
        render(model, "nodejs8.10")
    assert "table" in str(exc.value)


def test_unknown_runtime_fails_before_rendering():
    with pytest.raises(UnknownRuntime):
        compile_model(make_model({"f": "fn"}), "ruby2.5")


def test_function_edges_and_policy_blocks():
    ctx = compile_model(EVERYTHING, "nodejs8.10")
    for node in EVERYTHING:
        if node.type != "fn":
            continue
        definition = ctx.functions[node.id]
        assert ("events" in definition) == bool(node.from_)
        assert ("iamRoleStatements" in definition) == bool(node.to)


def test_everything():
    ctx = compile_model(EVERYTHING, "nodejs8.10")
    resources = ctx.resources
    assert set(resources) == {
        "uploads",
        "items",
        "clicks",
        "archive",
        "archiveDeliveryRole",
        "archiveDeliveryPolicy",
        "archiveBucket",
        "stats",
        "statsRole",
        "statsOutputs",
        "alerts",
        "flow",
        "visitors",
        "visitorsCognitoUnauthRole",
        "visitorsCognitoUnauthPolicy",
        "hot",
    }
    assert len(ctx.functions["worker"]["events"]) == 5
    assert len(ctx.functions["worker"]["iamRoleStatements"]) == 4
    assert set(ctx.files) == {".gitignore", "worker.js"}


def test_visit_order_doesnt_matter():
    forward = compile_model(EVERYTHING, "nodejs8.10")
    backward = compile_model(
        type(EVERYTHING)(dict(reversed(list(EVERYTHING.nodes.items())))), "nodejs8.10"
    )
    assert forward.resources == backward.resources
    assert forward.functions == backward.functions


def test_deterministic():
    assert render(EVERYTHING, "python3.7") == render(EVERYTHING, "python3.7")


def test_contexts_are_not_shared():
    a = compile_model(make_model({"f": "fn"}), "nodejs8.10")
    b = compile_model(make_model({"g": "fn"}), "nodejs8.10")
    assert set(a.functions) == {"f"}
    assert set(b.functions) == {"g"}


def test_function_policies_declare_the_iam_plugin():
    model = make_model(
        {"a": "fn", "b": "fn", "t": "table"}, [("a", "t"), ("b", "t")]
    )
    doc = yaml.safe_load(render(model, "nodejs8.10")[DESCRIPTOR_FILENAME])
    assert doc["plugins"] == ["serverless-iam-roles-per-function"]
    assert doc["functions"]["a"]["iamRoleStatements"]


def test_no_iam_plugin_without_function_policies():
    model = make_model({"f": "fn", "s": "schedule"}, [("s", "f"), ("f", "s")])
    ctx = compile_model(model, "nodejs8.10")
    assert "plugins" not in ctx.document
