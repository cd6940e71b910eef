import copy
import os
from collections.abc import Mapping

import yaml

DEFAULT_CONFIG = {
    "paths": {
        "input": None,
        "output": None
    },
    "output": {
        "ensure_ascii": False
    },
    "instrumentation": {
        "cpu_profile": None,
        "stats": False
    },
    "logging": {
        "file": None
    },
    "progress": True
}

EXPANDED_KEYS = (
    ("paths", "input"),
    ("paths", "output"),
    ("instrumentation", "cpu_profile"),
    ("logging", "file"),
)


class ConfigError(Exception):
    pass


def deep_merge(dict1, dict2):
    """Recursively merges dict2 into dict1."""
    result = dict1.copy()
    for key, value in dict2.items():
        if (
            key in result
            and isinstance(result[key], Mapping)
            and isinstance(value, Mapping)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path=None):
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return config

    try:
        with open(path, "r") as f:
            user_config = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError("Unable to read config file: {}".format(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError("Invalid config file {}: {}".format(path, e)) from e

    if not isinstance(user_config, Mapping):
        raise ConfigError("Config file {} must contain a mapping".format(path))

    config = deep_merge(config, user_config)
    for section, key in EXPANDED_KEYS:
        section_config = config.get(section)
        if not isinstance(section_config, Mapping):
            raise ConfigError("Config section '{}' must be a mapping".format(section))
        value = section_config.get(key)
        if value:
            section_config[key] = os.path.expanduser(str(value))
    return config
