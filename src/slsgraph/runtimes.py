"""Supported function runtimes and their scaffold files"""

from dataclasses import dataclass
from typing import Dict

from .exceptions import UnknownRuntime

# The ignore file is shared by every function in a project
IGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class Runtime:
    name: str
    file_extension: str
    handler: str  # name of the exported handler function
    ignore_file: str
    starting_code: str

    def source_filename(self, fn_id: str) -> str:
        return f"{fn_id}.{self.file_extension}"

    def handler_ref(self, fn_id: str) -> str:
        """The handler reference used in the function definition"""
        return f"{fn_id}.{self.handler}"


NODEJS_IGNORE = """\
# package directories
node_modules
jspm_packages

# Serverless directories
.serverless
"""

NODEJS_CODE = """\
'use strict';

module.exports.handler = (event, context, callback) => {
  const response = {
    statusCode: 200,
    body: JSON.stringify({
      message: 'Go Serverless v1.0! Your function executed successfully!',
      input: event,
    }),
  };

  callback(null, response);

  // Use this code if you don't use the http event with the LAMBDA-PROXY integration
  // callback(null, { message: 'Go Serverless v1.0! Your function executed successfully!', event });
};
"""

PYTHON_IGNORE = """\
# Distribution / packaging
.Python
env/
build/
develop-eggs/
dist/
downloads/
eggs/
.eggs/
lib/
lib64/
parts/
sdist/
var/
*.egg-info/
.installed.cfg
*.egg

# Serverless directories
.serverless
"""

PYTHON_CODE = '''\
import json

def handler(event, context):
    body = {
        "message": "Go Serverless v1.0! Your function executed successfully!",
        "input": event
    }

    response = {
        "statusCode": 200,
        "body": json.dumps(body)
    }

    return response

    # Use this code if you don't use the http event with the LAMBDA-PROXY integration
    """
    return {
        "message": "Go Serverless v1.0! Your function executed successfully!",
        "event": event
    }
    """
'''

RUNTIMES: Dict[str, Runtime] = {
    "nodejs8.10": Runtime(
        name="nodejs8.10",
        file_extension="js",
        handler="handler",
        ignore_file=NODEJS_IGNORE,
        starting_code=NODEJS_CODE,
    ),
    "python3.7": Runtime(
        name="python3.7",
        file_extension="py",
        handler="handler",
        ignore_file=PYTHON_IGNORE,
        starting_code=PYTHON_CODE,
    ),
}

DEFAULT_RUNTIME = "nodejs8.10"


def get_runtime(runtime_id: str) -> Runtime:
    """Look up a runtime in the catalog"""
    try:
        return RUNTIMES[runtime_id]
    except KeyError:
        raise UnknownRuntime(
            f"Runtime `{runtime_id}' is not supported",
            "Supported runtimes: " + ", ".join(RUNTIMES),
        )
