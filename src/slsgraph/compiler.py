"""Compile an architecture model into a Serverless Framework project"""

import logging
from typing import Dict

from .context import DEFAULT_PROVIDER, DEFAULT_SERVICE_NAME, BuildContext
from .model import Model
from .rules import get_rule
from .runtimes import get_runtime
from .serialise import dump_document

LOG = logging.getLogger(__name__)

DESCRIPTOR_FILENAME = "serverless.yml"


def compile_model(
    model: Model,
    runtime_id: str,
    service_name=DEFAULT_SERVICE_NAME,
    provider=DEFAULT_PROVIDER,
) -> BuildContext:
    """Build the deployment document and scaffold files for MODEL

    Every node is visited once, in model order.
    """
    # Fail before doing anything if the runtime is unknown
    get_runtime(runtime_id)

    ctx = BuildContext.create(
        model, runtime_id, service_name=service_name, provider=provider
    )
    for node in model:
        LOG.info("Rendering %s (%s)", node.id, node.type)
        get_rule(node.type).resource(ctx, node)

    LOG.info(
        "Rendered %d functions, %d resources",
        len(ctx.functions),
        len(ctx.resources),
    )
    return ctx


def render(model: Model, runtime_id: str, **kwargs) -> Dict[str, str]:
    """Compile MODEL and return {relative file path -> file contents}"""
    ctx = compile_model(model, runtime_id, **kwargs)
    files = dict(ctx.files)
    files[DESCRIPTOR_FILENAME] = dump_document(ctx.document)
    return files
