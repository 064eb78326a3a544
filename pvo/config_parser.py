"""
Configuration Parser for PVO.

This module handles parsing, validation and defaulting of the optional JSON
configuration file for the interactive evaluator, plus overrides taken from
environment variables.
"""

import json
import os
import logging
from typing import Dict, Any, Mapping, Optional
from jsonschema import validate, ValidationError
from .error_handling import success, error, is_error, get_value, get_error

# Set up logging
logger = logging.getLogger(__name__)

# Configuration schema for validation
CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "repl": {
            "type": "object",
            "properties": {
                "prompt": {"type": "string"},
                "echo_resolution": {"type": "boolean"}
            },
            "additionalProperties": False
        },
        "display": {
            "type": "object",
            "properties": {
                "group_width": {"type": "integer", "minimum": 1},
                "delimiter": {"type": "string"}
            },
            "additionalProperties": False
        },
        "logging": {
            "type": "object",
            "properties": {
                "log_level": {"type": "string", "enum": ["debug", "info", "warning", "error"]},
                "log_path": {"type": ["string", "null"]}
            },
            "additionalProperties": False
        }
    },
    "additionalProperties": False
}

# Environment variable -> (section, key)
ENVIRONMENT_OVERRIDES = {
    "PVO_LOG_LEVEL": ("logging", "log_level"),
    "PVO_LOG_PATH": ("logging", "log_path"),
    "PVO_PROMPT": ("repl", "prompt"),
}

def parse_input_config(input_path: str):
    """
    Parse a JSON configuration file.

    Args:
        input_path (str): Path to the JSON configuration file.

    Returns:
        Result: Parsed configuration dictionary, or an error message.
    """
    try:
        if not os.path.exists(input_path):
            return error(f"Configuration file not found: {input_path}")

        with open(input_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        logger.info(f"Successfully parsed configuration file: {input_path}")
        return success(config)
    except json.JSONDecodeError as e:
        return error(f"Invalid JSON in configuration file: {str(e)}")
    except OSError as e:
        return error(f"Error reading configuration: {str(e)}")

def validate_config(config_dict: Dict[str, Any]):
    """
    Validate a configuration dictionary and provide defaults for missing values.

    Args:
        config_dict (dict): Raw configuration dictionary from parsed JSON.

    Returns:
        Result: Validated configuration with defaults applied, or an error message.
    """
    try:
        validate(instance=config_dict, schema=CONFIG_SCHEMA)
    except ValidationError as e:
        logger.error(f"Configuration validation error: {e.message}")
        return error(f"Invalid configuration: {e.message}")

    config_dict.setdefault("repl", {})
    config_dict["repl"].setdefault("prompt", "$ ")
    config_dict["repl"].setdefault("echo_resolution", True)

    config_dict.setdefault("display", {})
    config_dict["display"].setdefault("group_width", 4)
    config_dict["display"].setdefault("delimiter", ".")

    config_dict.setdefault("logging", {})
    config_dict["logging"].setdefault("log_level", "warning")
    config_dict["logging"].setdefault("log_path", None)

    logger.debug("Configuration validated and defaults applied")
    return success(config_dict)

def apply_environment_overrides(config_dict: Dict[str, Any],
                                environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Override configuration values from PVO_* environment variables.

    Args:
        config_dict (dict): Validated configuration dictionary.
        environ (Mapping, optional): Environment to read, defaults to os.environ.

    Returns:
        dict: The same dictionary, updated in place.
    """
    environ = os.environ if environ is None else environ
    for variable, (section, key) in ENVIRONMENT_OVERRIDES.items():
        if variable in environ:
            config_dict[section][key] = environ[variable]
            logger.debug(f"Configuration {section}.{key} overridden by {variable}")

    level = config_dict["logging"]["log_level"].lower()
    if level not in CONFIG_SCHEMA["properties"]["logging"]["properties"]["log_level"]["enum"]:
        logger.warning(f"Unknown log level {level!r}, using 'warning'")
        level = "warning"
    config_dict["logging"]["log_level"] = level
    return config_dict

def load_config(input_path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Load the effective configuration: file (optional), defaults, environment.

    Args:
        input_path (str, optional): Path to a JSON configuration file.
        environ (Mapping, optional): Environment to read overrides from.

    Returns:
        dict: Complete configuration dictionary.

    Raises:
        ValueError: If the file cannot be read or does not match the schema.
    """
    raw_config: Dict[str, Any] = {}
    if input_path:
        raw_config_result = parse_input_config(input_path)
        if is_error(raw_config_result):
            raise ValueError(get_error(raw_config_result))
        raw_config = get_value(raw_config_result)

    validated_config_result = validate_config(raw_config)
    if is_error(validated_config_result):
        raise ValueError(get_error(validated_config_result))

    return apply_environment_overrides(get_value(validated_config_result), environ)
