# config_loader.py
import os

import yaml

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")

DEFAULTS = {
    "debug_level": 0,
    "compressed_suffix": ".hf",
}


def load_config(config_path=DEFAULT_CONFIG_PATH):
    with open(config_path, "r") as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {config_path} is not valid YAML: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    unknown = set(loaded) - set(DEFAULTS)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    config = dict(DEFAULTS)
    config.update(loaded)
    _validate(config)
    return config


def _validate(config):
    debug_level = config["debug_level"]
    # bool is an int subclass, but `debug_level: yes` is not a level
    if isinstance(debug_level, bool) or not isinstance(debug_level, int) or debug_level < 0:
        raise ValueError(f"debug_level must be a non-negative integer, got {debug_level!r}")

    suffix = config["compressed_suffix"]
    if not isinstance(suffix, str) or not suffix:
        raise ValueError(f"compressed_suffix must be a non-empty string, got {suffix!r}")
