"""
End-to-end tests for the PVO evaluator.

These tests drive the complete system the way a user does: lines typed into
the REPL or passed on the command line, through to the printed output.
"""

import importlib.util
import json
import logging
import os
import tempfile

import numpy as np
import pytest

from pvo import evaluate_expression, run_repl, main
from pvo.config_parser import validate_config
from pvo.error_handling import get_value, UnknownConnective, InvalidSymbol, ArityMismatch
from pvo.pvo import parse_request, format_help, render_result, enable_line_editing

TEST_CONFIG = {
    "repl": {"prompt": "$ ", "echo_resolution": False},
    "display": {"group_width": 4, "delimiter": "."},
    "logging": {"log_level": "info"}
}

class TestEndToEnd:
    """End-to-end test cases for the complete system."""

    def setup_method(self):
        """Setup for each test method."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config = get_value(validate_config(json.loads(json.dumps(TEST_CONFIG))))
        self.prompts = []
        self.output = []

    def teardown_method(self):
        """Cleanup after each test method."""
        package_logger = logging.getLogger("pvo")
        for handler in list(package_logger.handlers):
            handler.close()
            package_logger.removeHandler(handler)
        self.temp_dir.cleanup()

    def _run(self, lines, config=None):
        """Feed lines to the REPL and return what it printed."""
        remaining = iter(lines)

        def read_line(prompt):
            self.prompts.append(prompt)
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError

        run_repl(config or self.config, input_fn=read_line, output_fn=self.output.append)
        return self.output

    def test_single_alias(self):
        assert self._run(["and"]) == ["tfff"]
        assert self.prompts == ["$ ", "$ "]

    def test_alias_or(self):
        assert self._run(["or"]) == ["tttf"]

    def test_composition(self):
        """Test two connectives compose into a grouped 8-character vector"""
        assert self._run(["and or"]) == ["tttt.tfff"]

    def test_evaluation(self):
        assert self._run(["and - tt"]) == ["tfff", "true"]
        assert self._run(["and - 10"]) == ["tfff", "true", "tfff", "false"]

    def test_punctuation_is_ignored(self):
        """Test "." and "," are stripped, so output can be pasted back"""
        assert self._run(["and, or. - ftt", "tttt.tfff - ftt"]) == [
            "tttt.tfff", "true",
            "tttt.tfff", "true"
        ]

    def test_errors_print_question_mark(self):
        """Test every rejected line prints "?" and the loop continues"""
        output = self._run(["zzzz", "and - x", "and - ttt", "tft", "and"])
        assert output == ["?", "?", "?", "?", "tfff"]

    def test_empty_input(self):
        assert self._run(["", "   ", ".,", "- tt"]) == []

    def test_help(self):
        output = self._run(["?", "help"])
        assert output[0].startswith("{'opq': 'ffff',")
        assert output[-2:] == ["true", "false"]
        assert output.count("true") == 2

    def test_resolution_echo(self):
        """Test resolution hops are echoed, one block per name"""
        self.config["repl"]["echo_resolution"] = True
        assert self._run(["and or", "ffft"]) == [
            "and = kpq", "kpq = tfff", "",
            "or = apq", "apq = tttf", "",
            "tttt.tfff",
            "ffft"
        ]

    def test_interrupt_ends_loop(self):
        def interrupted(prompt):
            raise KeyboardInterrupt

        run_repl(self.config, input_fn=interrupted, output_fn=self.output.append)
        assert self.output == []

    def test_custom_display(self):
        self.config["display"] = {"group_width": 2, "delimiter": " "}
        assert self._run(["and or"]) == ["tt tt tf ff"]

    def test_evaluate_expression_result(self):
        """Test the structured result of the pipeline"""
        result = evaluate_expression("and or xor - tftf", self.config)
        assert result["names"] == ["and", "or", "xor"]
        assert result["arity"] == 4
        assert result["vector"].shape == (16,)
        assert result["encoded"].count(".") == 3
        assert isinstance(result["value"], bool)

        # Defaults apply without a configuration
        assert evaluate_expression("or")["encoded"] == "tttf"
        assert evaluate_expression("") is None
        assert evaluate_expression("?")["command"] == "help"

    def test_evaluate_expression_errors(self):
        with pytest.raises(UnknownConnective):
            evaluate_expression("zzzz")
        with pytest.raises(InvalidSymbol):
            evaluate_expression("and - x")
        with pytest.raises(ArityMismatch):
            evaluate_expression("and - true")

    def test_fold_matches_pairwise(self):
        """Test a three-name line equals explicit pairwise evaluation"""
        whole = evaluate_expression("xor and nand")["vector"]
        first = evaluate_expression("xor and")["encoded"].replace(".", "")
        folded = evaluate_expression(f"{first} nand")["vector"]
        assert np.array_equal(whole, folded)

    def test_cli_expressions(self, capsys):
        """Test one-shot evaluation from the command line"""
        status = main(["-q", "-e", "and or", "-e", "and - tt"])
        captured = capsys.readouterr()
        assert status == 0
        assert captured.out.splitlines() == ["tttt.tfff", "tfff", "true"]

        status = main(["-q", "-e", "zzzz"])
        assert status == 1
        assert capsys.readouterr().out.splitlines() == ["?"]

    def test_cli_echo(self, capsys):
        assert main(["-e", "or"]) == 0
        assert capsys.readouterr().out.splitlines() == ["or = apq", "apq = tttf", "", "tttf"]

    def test_cli_bad_config(self, capsys):
        path = os.path.join(self.temp_dir.name, "bad.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"display": {"group_width": 0}}, f)

        assert main(["-c", path, "-e", "and"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_cli_log_file(self, capsys):
        """Test a configured log path receives the evaluation log"""
        log_dir = os.path.join(self.temp_dir.name, "logs")
        path = os.path.join(self.temp_dir.name, "config.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"logging": {"log_level": "info", "log_path": log_dir}}, f)

        assert main(["-c", path, "-q", "-e", "and or"]) == 0
        assert capsys.readouterr().out.splitlines() == ["tttt.tfff"]

        log_files = os.listdir(log_dir)
        assert len(log_files) == 1
        with open(os.path.join(log_dir, log_files[0]), encoding="utf-8") as f:
            assert "Evaluated and or" in f.read()

def test_parse_request():
    assert parse_request("and or - ftt") == {
        "command": "evaluate", "names": ["and", "or"], "assignment": " ftt"
    }
    assert parse_request("xor")["assignment"] is None
    assert parse_request(" ?. ")["command"] == "help"
    assert parse_request("help")["command"] == "help"

def test_format_help():
    text = format_help()
    assert "'kpq': 'tfff'" in text
    assert "'and': 'kpq'" in text
    assert text.endswith("true\nfalse")

def test_render_result():
    result = evaluate_expression("and - ff")
    assert render_result(result, echo_resolution=False) == ["tfff", "false"]

def test_enable_line_editing():
    """Test readline is loaded for the REPL wherever the platform ships it"""
    available = importlib.util.find_spec("readline") is not None
    assert enable_line_editing() is available
