"""Load slsgraph configuration, usually stored in slsgraph.toml"""

import logging
import shutil
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

import toml

from .context import DEFAULT_PROVIDER, DEFAULT_SERVICE_NAME
from .exceptions import ConfigError, UserResolvableError
from .runtimes import DEFAULT_RUNTIME

LOG = logging.getLogger(__name__)

SLSGRAPH_DIST_DATA = Path(__file__).parent / "dist_data"
DEFAULT_CONFIG_FILEPATH = Path("slsgraph.toml")
DEFAULT_MODEL_FILE = "model.json"
DEFAULT_OUTPUT_DIR = "build"


@dataclass
class ProjectConfig:
    service: str = DEFAULT_SERVICE_NAME
    runtime: str = DEFAULT_RUNTIME
    provider: str = DEFAULT_PROVIDER
    model: Path = Path(DEFAULT_MODEL_FILE)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)

    def __post_init__(self):
        # ensure some keys are paths
        for key in ["model", "output_dir"]:
            setattr(self, key, Path(getattr(self, key)))


@dataclass
class Config:
    root: Path
    config_file: Union[Path, None]
    project: ProjectConfig


def load(args: dict) -> Config:
    """Load the configuration

    The default config file is optional. One given with --config must exist.
    """
    if args.get("--config"):
        config_file = Path(args["--config"])
        required = True
    else:
        config_file = DEFAULT_CONFIG_FILEPATH
        required = False

    try:
        data = toml.load(config_file)
    except FileNotFoundError:
        if required:
            raise ConfigError(
                f"{config_file} not found",
                "Check the path, or use `slsgraph init' to generate a new one.",
            )
        LOG.info("No %s, using defaults", config_file)
        return Config(root=Path.cwd(), config_file=None, project=ProjectConfig())
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Can't parse {config_file}: {exc}", "Fix the syntax.")

    project_data = data.get("project", {})
    known = {f.name for f in fields(ProjectConfig)}
    unknown = set(project_data) - known
    if unknown:
        raise ConfigError(
            f"Unknown keys in [project] section of {config_file}: "
            + ", ".join(sorted(unknown)),
            "Valid keys: " + ", ".join(sorted(known)),
        )

    project_root = config_file.parent.resolve()
    project = ProjectConfig(**project_data)

    # make paths relative to the config file
    for key in ["model", "output_dir"]:
        value = getattr(project, key)
        if not value.is_absolute():
            setattr(project, key, project_root / value)

    LOG.info("Loaded configuration from %s", config_file)
    return Config(root=project_root, config_file=config_file, project=project)


def create_skeleton(dest="."):
    """Create a skeleton (template) config file in the given dir"""
    filename = Path(dest) / DEFAULT_CONFIG_FILEPATH
    if filename.exists():
        raise UserResolvableError(
            f"{filename} already exists", "Cowardly refusing to clobber it...",
        )
    shutil.copyfile(SLSGRAPH_DIST_DATA / DEFAULT_CONFIG_FILEPATH, filename)
    return filename
