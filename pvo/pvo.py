#!/usr/bin/env python3
"""
PVO: Main Evaluation Pipeline

This module implements the line-oriented front end of the evaluator. Each input line
goes through:
1. Request parsing (connective names and an optional "-" assignment)
2. Name resolution through the alias and truth tables
3. Left-to-right composition of the resolved truth vectors
4. Optional evaluation at the supplied assignment
5. Rendering of the encoded truth vector and result

Rejected lines print a single "?" and the loop continues.
"""

import argparse
import importlib
import logging
import os
import sys
from pprint import pformat
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from .alias_resolver import resolve_with_trace
from .config_parser import load_config, validate_config
from .connective_tables import ALIASES, BOOLEAN_LITERALS, TRUTH_TABLE
from .error_handling import ConnectiveError, get_value
from .logging_utils import initialize_logger, timer
from .vector_operations import (
    arity_of, decode_assignment, encode_vector, evaluate_vector, reduce_vectors
)

# Configure logging
logger = logging.getLogger(__name__)

HELP_COMMANDS = ("?", "help")


def parse_request(line: str) -> Dict[str, Any]:
    """
    Split an input line into connective names and an optional assignment.

    Every "." and "," is removed first, so encoded output such as "tttt.tfff" can
    be pasted back in as a literal.

    Args:
        line (str): Raw input line, e.g. "and or - ftt"

    Returns:
        dict: {"command": "help" | "evaluate", "names": [...],
               "assignment": text after the first "-", or None}
    """
    cleaned = line.replace(".", "").replace(",", "").strip()
    if cleaned in HELP_COMMANDS:
        return {"command": "help", "names": [], "assignment": None}

    expression, dash, assignment = cleaned.partition("-")
    return {
        "command": "evaluate",
        "names": expression.split(),
        "assignment": assignment if dash else None
    }

def format_help() -> str:
    """Dump the truth table, the alias table and the boolean literals."""
    lines = [
        pformat(dict(TRUTH_TABLE), sort_dicts=False),
        pformat(dict(ALIASES), sort_dicts=False),
    ]
    lines.extend(BOOLEAN_LITERALS)
    return "\n".join(lines)

@timer("evaluate_expression")
def evaluate_expression(line: str, config: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    """
    Evaluate one input line.

    Args:
        line (str): Raw input line.
        config (dict, optional): Validated configuration; defaults are used when None.

    Returns:
        dict: None for an empty request, {"command": "help", "text": ...} for a help
              request, otherwise a result dictionary containing:
              - names (list): Connective names in input order
              - trace (list): Per-name list of (name, replacement) hops
              - vector (np.ndarray): Composed truth vector
              - arity (int): Number of inputs of the composed function
              - encoded (str): Grouped encoding of the vector
              - value (bool): Result at the assignment, or None without one

    Raises:
        UnknownConnective: If a name cannot be resolved.
        InvalidSymbol: If a literal or the assignment has an invalid symbol.
        ArityMismatch: If the assignment length does not match the arity.
    """
    if config is None:
        config = get_value(validate_config({}))
    display = config["display"]

    request = parse_request(line)
    if request["command"] == "help":
        return {"command": "help", "text": format_help()}
    if not request["names"]:
        return None

    vectors = []
    trace = []
    for name in request["names"]:
        vector, hops = resolve_with_trace(name)
        vectors.append(vector)
        trace.append(hops)

    combined = reduce_vectors(vectors)

    value = None
    if request["assignment"] is not None:
        value = evaluate_vector(combined, decode_assignment(request["assignment"]))

    logger.info(f"Evaluated {' '.join(request['names'])} ({len(vectors)} connectives)")
    return {
        "command": "evaluate",
        "names": request["names"],
        "trace": trace,
        "vector": combined,
        "arity": arity_of(combined),
        "encoded": encode_vector(combined, display["group_width"], display["delimiter"]),
        "value": value
    }

def render_result(result: Dict[str, Any], echo_resolution: bool = True) -> List[str]:
    """Turn an evaluation result into output lines."""
    if result["command"] == "help":
        return result["text"].split("\n")

    lines = []
    if echo_resolution:
        for hops in result["trace"]:
            if hops:
                lines.extend(f"{source} = {target}" for source, target in hops)
                lines.append("")

    lines.append(result["encoded"])
    if result["value"] is not None:
        lines.append("true" if result["value"] else "false")
    return lines

def process_line(line: str, config: Dict[str, Any], output_fn: Callable[[str], Any] = print) -> bool:
    """
    Evaluate a line and write its output, reporting rejection as "?".

    Returns:
        bool: False if the line was rejected.
    """
    try:
        result = evaluate_expression(line, config)
    except ConnectiveError as e:
        logger.info(f"Rejected {line!r}: {e}")
        output_fn("?")
        return False

    if result is not None:
        for output_line in render_result(result, config["repl"]["echo_resolution"]):
            output_fn(output_line)
    return True

def run_repl(config: Dict[str, Any],
             input_fn: Callable[[str], str] = input,
             output_fn: Callable[[str], Any] = print) -> None:
    """
    Read-evaluate-print loop. Ends on end of input or interrupt.

    Args:
        config (dict): Validated configuration.
        input_fn (Callable): Reads one line given the prompt.
        output_fn (Callable): Writes one output line.
    """
    prompt = config["repl"]["prompt"]
    while True:
        try:
            line = input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, leaving REPL")
            break
        process_line(line, config, output_fn)

def enable_line_editing() -> bool:
    """
    Give input() line editing and history through readline, where the platform has it.

    Returns:
        bool: Whether readline was loaded.
    """
    try:
        importlib.import_module("readline")
    except ImportError:
        logger.debug("readline not available, line editing disabled")
        return False
    return True

def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Evaluate and compose truth-table connectives")
    parser.add_argument("--config", "-c", default=os.environ.get("PVO_CONFIG"),
                        help="Path to a JSON configuration file")
    parser.add_argument("--expr", "-e", action="append",
                        help="Evaluate an expression and exit (repeatable)")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"],
                        help="Override the configured log level")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Do not echo alias resolution")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 2

    if args.log_level:
        config["logging"]["log_level"] = args.log_level
    if args.quiet:
        config["repl"]["echo_resolution"] = False

    initialize_logger(config["logging"]["log_level"], config["logging"]["log_path"])

    if args.expr:
        results = [process_line(expr, config) for expr in args.expr]
        return 0 if all(results) else 1

    enable_line_editing()
    run_repl(config)
    return 0

if __name__ == "__main__":
    sys.exit(main())
