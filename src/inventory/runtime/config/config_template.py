"""Load ``config.yaml`` with shell-style environment placeholders.

Placeholders:

- ``${NAME}``: required, fails when ``NAME`` is unset
- ``${NAME:-default}``: ``default`` when ``NAME`` is unset
- ``${NAME:?message}``: required, fails with ``message``
"""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.inventory.runtime.config.config_data import ConfigData

PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}")


def _resolve(match: re.Match) -> str:
    name, op, arg = match.group("name", "op", "arg")
    value = os.getenv(name)
    if value is not None:
        return value
    if op == ":-":
        return arg
    if op == ":?":
        raise ValueError(f"Required environment variable {name}: {arg}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder in ``text`` with its environment value."""
    return PLACEHOLDER.sub(_resolve, text)


def apply_environment_prefix(env_mode: str) -> None:
    """Re-export ``<ENV>_NAME`` variables as ``NAME`` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    overrides = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix)
    }
    for name, value in overrides.items():
        os.environ[name] = value
        logger.debug("Set environment variable {} from {}{}", name, prefix, name)


def load_templated_yaml(file_path: Path, env_mode: str = "development") -> ConfigData:
    """Read, substitute and validate the ``config:`` section of ``file_path``.

    Raises ``ValueError`` for a missing variable, unparsable YAML, an empty
    document or a section that does not validate.
    """
    text = Path(file_path).read_text()

    logger.info("Loading configuration for environment: {}", env_mode)
    apply_environment_prefix(env_mode)

    try:
        document = yaml.safe_load(substitute_env_vars(text))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not document:
        raise ValueError(f"Configuration file {file_path} is empty")

    try:
        config = ConfigData(**(document.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    if config.app.environment != env_mode:
        logger.warning(
            "config.yaml declares environment '{}' but APP_ENVIRONMENT is '{}'",
            config.app.environment,
            env_mode,
        )

    return config
