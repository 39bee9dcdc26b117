"""Process-wide configuration, overridable per context.

The configuration is loaded once at import. ``with_context`` layers partial
overrides on top of it for the current context only, which is how tests
point the service at a throwaway database.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from src.inventory.runtime.config.config_data import AppConfig, ConfigData
from src.inventory.runtime.config.config_template import load_templated_yaml
from src.inventory.runtime.config.settings import EnvironmentVariables


@dataclass
class AppContext:
    config: ConfigData


def load_default_config(env_vars: EnvironmentVariables | None = None) -> ConfigData:
    """Load the configured YAML file, or model defaults when it is absent."""
    env_vars = env_vars or EnvironmentVariables()
    config_path = Path(env_vars.config_file)
    if config_path.exists():
        return load_templated_yaml(config_path, env_vars.app_environment)

    logger.warning(
        "Configuration file {} not found; using built-in defaults", config_path
    )
    return ConfigData(app=AppConfig(environment=env_vars.app_environment))


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_default_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def get_config() -> ConfigData:
    """Configuration in effect for the current context."""
    return get_context().config


def _explicit_fields(model: BaseModel) -> dict:
    """Fields set on ``model`` by the caller, nested models included.

    A nested model that was assigned wholesale but has nothing set inside it
    contributes its full dump.
    """
    explicit: dict = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _deep_merge(base: dict, overlay: dict) -> dict:
    merged = dict(base)
    for key, value in overlay.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _overlay_config(base: ConfigData, override: ConfigData) -> ConfigData:
    return ConfigData.model_validate(
        _deep_merge(base.model_dump(), _explicit_fields(override))
    )


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily overlay ``config_override`` on the current configuration.

    Only fields set explicitly on the override change; everything else keeps
    its current value.

    Example:
        override = ConfigData()
        override.pagination.max_limit = 25
        with with_context(override):
            assert get_config().pagination.max_limit == 25
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData or None, got {type(config_override)}"
        )

    merged = _overlay_config(get_config(), config_override)
    token = set_context(replace(get_context(), config=merged))
    try:
        yield
    finally:
        _app_context.reset(token)
