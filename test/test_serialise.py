"""Test YAML output"""
import yaml

from slsgraph.serialise import dump_document


def test_key_order_is_kept():
    text = dump_document({"service": "s", "provider": {"name": "aws"}, "a": 1})
    assert text.splitlines()[0] == "service: s"
    assert text.index("provider") < text.index("a: 1")


def test_tags_are_unquoted():
    text = dump_document({"Role": "!GetAtt myRole.Arn", "Name": "plain"})
    assert "Role: !GetAtt myRole.Arn" in text
    assert "'" not in text


def test_long_form_intrinsics_survive():
    doc = {"Resource": {"Fn::Join": ["", [{"Ref": "AWS::Region"}, ":x"]]}}
    assert yaml.safe_load(dump_document(doc)) == doc


def test_long_lines_are_not_folded():
    value = "x " * 200 + "x"
    text = dump_document({"Long": value})
    assert len(text.splitlines()) == 1


def test_tags_in_lists_are_unquoted():
    text = dump_document({"Roles": ["!Ref myRole", "plain"]})
    assert "- !Ref myRole" in text


def test_descriptions_starting_with_bang_are_kept():
    doc = {"functions": {"f": {"description": "!important handler"}}}
    assert yaml.safe_load(dump_document(doc)) == doc


def test_quoted_words_in_descriptions_are_kept():
    doc = {"description": "reads the '!raw' prefix"}
    assert yaml.safe_load(dump_document(doc)) == doc


def test_only_intrinsic_tags_are_unquoted():
    text = dump_document({"a": "!Refs x", "b": "!Custom y"})
    assert "a: '!Refs x'" in text
    assert "b: '!Custom y'" in text
