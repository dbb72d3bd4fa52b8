"""CloudFormation fragments shared by the rules

Everything here returns plain dicts/lists, using the long `Fn::' form of the
intrinsic functions.
"""

from typing import List, Union

POLICY_VERSION = "2012-10-17"

REGION = {"Ref": "AWS::Region"}
ACCOUNT_ID = {"Ref": "AWS::AccountId"}


def ref(name: str) -> dict:
    return {"Ref": name}


def get_att(name: str, attribute="Arn") -> dict:
    return {"Fn::GetAtt": [name, attribute]}


def join(*parts, delimiter="") -> dict:
    return {"Fn::Join": [delimiter, list(parts)]}


def account_region_arn(service: str, suffix: str) -> dict:
    """arn:aws:SERVICE:<region>:<account>SUFFIX"""
    return join(f"arn:aws:{service}:", REGION, ":", ACCOUNT_ID, suffix)


def firehose_arn(stream_id: str) -> dict:
    """ARN of a delivery stream

    Delivery streams can't be referenced with Fn::GetAtt, so build it:
    arn:aws:firehose:region:account-id:deliverystream/delivery-stream-name
    """
    return account_region_arn("firehose", f":deliverystream/{stream_id}")


def statement(action: Union[str, List[str]], resource, effect="Allow") -> dict:
    return {"Effect": effect, "Action": action, "Resource": resource}


def policy_document(statements: list = None) -> dict:
    return {"Version": POLICY_VERSION, "Statement": list(statements or [])}


def assume_role_document(principal: dict, action="sts:AssumeRole", condition=None):
    """Trust policy allowing PRINCIPAL to assume a role"""
    stmt = {"Effect": "Allow", "Principal": principal, "Action": action}
    if condition:
        stmt["Condition"] = condition
    return policy_document([stmt])


def role(assume_role_policy: dict, **properties) -> dict:
    return {
        "Type": "AWS::IAM::Role",
        "Properties": {"AssumeRolePolicyDocument": assume_role_policy, **properties},
    }


def role_policy(policy_name: str, role_id: str, statements: list) -> dict:
    """A policy attached to a role created in the same document"""
    return {
        "Type": "AWS::IAM::Policy",
        "Properties": {
            "PolicyName": policy_name,
            "PolicyDocument": policy_document(statements),
            "Roles": [ref(role_id)],
        },
    }
