"""Cognito identity pools"""

from .. import cfn
from ..model import COGNITO_IDENTITY
from .base import Rule, collect_statements, register

COGNITO_IDENTITY_SERVICE = "cognito-identity.amazonaws.com"


@register(COGNITO_IDENTITY)
class CognitoIdentityRule(Rule):
    """An identity pool for unauthenticated users

    Outgoing edges are what those users may access, granted through the
    policy on the pool's unauthenticated role.
    """

    def resource(self, ctx, node):
        role_id = node.id + "CognitoUnauthRole"
        policy_id = node.id + "CognitoUnauthPolicy"

        # TODO make unauthenticated access configurable per node
        ctx.resources[node.id] = {
            "Type": "AWS::Cognito::IdentityPool",
            "Properties": {"AllowUnauthenticatedIdentities": True},
        }
        ctx.resources[role_id] = cfn.role(
            cfn.assume_role_document(
                {"Federated": COGNITO_IDENTITY_SERVICE},
                action="sts:AssumeRoleWithWebIdentity",
                condition={
                    "StringEquals": {
                        f"{COGNITO_IDENTITY_SERVICE}:aud": cfn.ref(node.id)
                    },
                    "ForAnyValue:StringLike": {
                        f"{COGNITO_IDENTITY_SERVICE}:amr": "unauthenticated"
                    },
                },
            )
        )
        ctx.resources[policy_id] = cfn.role_policy(
            "cognito_unauth_policy",
            role_id,
            collect_statements(ctx, node.id, node.to),
        )
