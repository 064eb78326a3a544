"""
Test configuration parsing, validation and environment overrides
"""

import json
import os
import tempfile

import pytest
from pvo.config_parser import (
    parse_input_config, validate_config, apply_environment_overrides, load_config
)
from pvo.error_handling import is_error, get_value, get_error

def _write_config(directory, content):
    path = os.path.join(directory, "config.json")
    with open(path, "w", encoding="utf-8") as f:
        if isinstance(content, str):
            f.write(content)
        else:
            json.dump(content, f)
    return path

def test_validate_config_defaults():
    """Test an empty configuration gets every default"""
    result = validate_config({})
    assert not is_error(result)
    config = get_value(result)
    assert config["repl"] == {"prompt": "$ ", "echo_resolution": True}
    assert config["display"] == {"group_width": 4, "delimiter": "."}
    assert config["logging"] == {"log_level": "warning", "log_path": None}

def test_validate_config_keeps_values():
    config = get_value(validate_config({"display": {"delimiter": "_"}, "repl": {"prompt": "> "}}))
    assert config["display"]["delimiter"] == "_"
    assert config["display"]["group_width"] == 4
    assert config["repl"]["prompt"] == "> "

@pytest.mark.parametrize("bad_config", [
    {"display": {"group_width": 0}},
    {"display": {"group_width": "4"}},
    {"logging": {"log_level": "verbose"}},
    {"repl": {"echo": True}},
    {"unknown_section": {}},
    ["not", "an", "object"],
])
def test_validate_config_rejects(bad_config):
    result = validate_config(bad_config)
    assert is_error(result)
    assert "Invalid configuration" in get_error(result)

def test_parse_input_config():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = _write_config(temp_dir, {"repl": {"prompt": "pvo> "}})
        result = parse_input_config(path)
        assert not is_error(result)
        assert get_value(result) == {"repl": {"prompt": "pvo> "}}

        # Invalid JSON
        bad_path = _write_config(temp_dir, "{not json")
        assert is_error(parse_input_config(bad_path))

    # Missing file
    result = parse_input_config("/nonexistent/pvo/config.json")
    assert is_error(result)
    assert "not found" in get_error(result)

def test_environment_overrides():
    """Test PVO_* variables override the file and defaults"""
    config = get_value(validate_config({}))
    environ = {"PVO_LOG_LEVEL": "DEBUG", "PVO_PROMPT": ">> ", "UNRELATED": "x"}
    config = apply_environment_overrides(config, environ)
    assert config["logging"]["log_level"] == "debug"
    assert config["repl"]["prompt"] == ">> "

def test_environment_override_unknown_level():
    config = get_value(validate_config({}))
    config = apply_environment_overrides(config, {"PVO_LOG_LEVEL": "chatty"})
    assert config["logging"]["log_level"] == "warning"

def test_load_config():
    """Test the complete loading sequence"""
    with tempfile.TemporaryDirectory() as temp_dir:
        path = _write_config(temp_dir, {"display": {"group_width": 2}})
        config = load_config(path, environ={})
        assert config["display"]["group_width"] == 2
        assert config["repl"]["echo_resolution"] is True

        bad_path = _write_config(temp_dir, {"display": {"group_width": -1}})
        with pytest.raises(ValueError):
            load_config(bad_path, environ={})

    # No file: defaults only
    assert load_config(None, environ={})["display"]["delimiter"] == "."
