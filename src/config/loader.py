"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  — static defaults checked into the repo
                           (assistant domain, refusal text, search defaults)
  2. .env file / environment variables — via :class:`Settings`

``_deep_merge`` does recursive dict merging, so a YAML section can hold
defaults while the environment overrides individual keys.
"""

from pathlib import Path

import yaml

from src.config.settings import Settings

_DEFAULTS: dict = {
    "assistant": {
        "domain": "Cisco Intersight",
        "refusal_message": (
            "I can only help with questions about Cisco Intersight."
        ),
        "no_documentation_message": (
            "There is no confirmed Cisco documentation matching this question."
        ),
        "summary_top_n": 2,
    },
    "search": {
        "results_limit": 10,
        "limit": 10,
        "distance": 0.4,
        "use_google_search": False,
        "use_vector_search": True,
    },
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file. A missing file is not an
            error; built-in defaults are used instead.
        settings: Settings instance to draw overrides from. A fresh one is
            constructed when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config: dict = _copy(_DEFAULTS)

    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
        _deep_merge(config, yaml_config)

    s = settings or Settings()
    env_overrides = {
        "app": {
            "host": s.app_host,
            "port": s.app_port,
            "env": s.app_env,
        },
        "providers": s.get_configured_providers(),
        "logging": {
            "level": s.log_level,
        },
    }

    _deep_merge(config, env_overrides)
    return config


def _copy(value: dict) -> dict:
    return {k: _copy(v) if isinstance(v, dict) else v for k, v in value.items()}


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
