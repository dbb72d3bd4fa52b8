"""Serialise the deployment descriptor as YAML"""

import re

import yaml

# Long lines would be folded, and folding can quote intrinsic function tags
LINE_WIDTH = 1024

# Short forms of the CloudFormation intrinsic functions
INTRINSIC_TAGS = [
    "Ref",
    "GetAtt",
    "Sub",
    "Join",
    "Select",
    "Split",
    "If",
    "Equals",
    "Not",
    "And",
    "Or",
    "FindInMap",
    "ImportValue",
    "Base64",
    "Cidr",
    "GetAZs",
]

# A whole mapping value or list item that is a quoted intrinsic, e.g.
#   Role: '!GetAtt foo.Arn'
# must be unquoted for the tag to work. Anything else is left alone.
QUOTED_TAG = re.compile(
    r"^([ \t]*(?:- )*(?:[^'\n]+: )?)'(!(?:"
    + "|".join(INTRINSIC_TAGS)
    + r")(?:[ \t][^'\n]*)?)'$",
    re.M,
)


def dump_document(document: dict) -> str:
    """Render DOCUMENT as YAML text, keeping key order"""
    text = yaml.safe_dump(
        document, default_flow_style=False, sort_keys=False, width=LINE_WIDTH
    )
    return QUOTED_TAG.sub(r"\1\2", text)
