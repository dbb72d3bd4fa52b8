"""slsgraph.

Usage:
  slsgraph [options] compile [MODEL] [-r RUNTIME] [-o DIR] [--service=NAME] [--force]
  slsgraph [options] show [MODEL]
  slsgraph [options] runtimes
  slsgraph [options] init
  slsgraph --version
  slsgraph -h | --help

Commands:
  compile   Compile a model into a Serverless Framework project.
  show      List the nodes and edges in a model.
  runtimes  List the supported runtimes.
  init      Create a skeleton slsgraph.toml.

Arguments:
  MODEL  Architecture model (JSON). Defaults to the configured model.

Options:
  --version       Show version.
  -h, --help      Show this screen.
  -q, --quiet     Be quiet.
  -v, --verbose   Be verbose.
  -V, --vverbose  Be very verbose.
  --no-colours    Disable colours in CLI output.

  --config=CONFIG  Config file to use (default: slsgraph.toml, if it exists)

  -r RUNTIME, --runtime=RUNTIME  Function runtime (e.g. python3.7)
  -o DIR, --output=DIR           Output directory
  --service=NAME                 Service name
  --force                        Overwrite existing files
"""

import logging
import sys
import time
from functools import wraps
from pathlib import Path
from typing import Dict

from docopt import docopt

from .. import __version__, config
from ..compiler import render
from ..exceptions import UnexpectedError, UserResolvableError
from ..model import load_model
from ..runtimes import RUNTIMES
from . import interface as ui
from .interface import TICK, dim, exit_bug, exit_problem, good, init, neutral

LOG = logging.getLogger(__name__)


def timed(fn):
    """Time execution of fn and print it"""

    @wraps(fn)
    def _wrapped(args, **kwargs):
        start = time.time()
        fn(args, **kwargs)
        end = time.time()
        if not args["--quiet"]:
            sys.stderr.write(str(dim(f"\n-- {end-start:.2f}s\n")))

    return _wrapped


def need_cfg(fn):
    """Exec fn with config"""

    @wraps(fn)
    def _wrapped(args):
        cfg = config.load(args)
        return fn(args, cfg=cfg)

    return _wrapped


def _model_path(args, cfg) -> Path:
    return Path(args["MODEL"]) if args["MODEL"] else cfg.project.model


def write_files(files: Dict[str, str], dest: Path, force=False):
    """Write the rendered FILES into DEST"""
    if not force:
        existing = [name for name in files if (dest / name).exists()]
        if existing:
            raise UserResolvableError(
                f"Files already exist in {dest}: " + ", ".join(existing),
                "Use --force to overwrite them.",
            )

    for name, text in files.items():
        filename = dest / name
        filename.parent.mkdir(parents=True, exist_ok=True)
        with open(filename, "w") as f:
            f.write(text)
        LOG.info("Wrote %s", filename)


@need_cfg
def _compile(args, cfg):
    model = load_model(_model_path(args, cfg))
    runtime = args["--runtime"] or cfg.project.runtime
    service = args["--service"] or cfg.project.service
    dest = Path(args["--output"]) if args["--output"] else cfg.project.output_dir

    files = render(model, runtime, service_name=service, provider=cfg.project.provider)
    write_files(files, dest, force=args["--force"])

    for name in files:
        ui.info(TICK + " " + str(good(str(dest / name))))


@need_cfg
def _show(args, cfg):
    model = load_model(_model_path(args, cfg))
    rows = [
        [node.id, node.type, ", ".join(node.from_), ", ".join(node.to)]
        for node in model
    ]
    print(ui.table(["Node", "Type", "From", "To"], rows))


def _runtimes(args):
    for runtime in RUNTIMES.values():
        print(str(neutral(runtime.name)) + f" (*.{runtime.file_extension})")


def _init(args):
    filename = config.create_skeleton()
    print("\n" + TICK + " Created " + str(good(filename)))


@timed
def dispatch(args):
    if args["compile"]:
        _compile(args)
    elif args["show"]:
        _show(args)
    elif args["runtimes"]:
        _runtimes(args)
    elif args["init"]:
        _init(args)
    else:
        exit_problem("Invalid command line.", __doc__)


def main():
    args = docopt(__doc__, version=__version__)
    init(args)
    LOG.debug("CLI args: %s", args)

    try:
        dispatch(args)
    except UserResolvableError as exc:
        exit_problem(exc.msg, exc.suggested_fix)
    except UnexpectedError as exc:
        exit_bug(str(exc))


if __name__ == "__main__":
    main()
