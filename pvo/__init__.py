"""
PVO: Truth-Table Connective Evaluator

A Python library and REPL for naming binary logical connectives, composing their
truth vectors left to right into multi-input functions and evaluating the result
at concrete assignments.
"""

__version__ = "0.2.0"

# Import core components for easy access
from .vector_operations import (
    TruthSymbol, arity_of, enumerate_inputs, parse_truth_symbol,
    decode_vector, encode_vector, decode_assignment,
    evaluate_vector, compose_vectors, reduce_vectors
)
from .alias_resolver import resolve_name, resolve_with_trace
from .connective_tables import ALIASES, TRUTH_TABLE
from .config_parser import load_config, validate_config
from .error_handling import ConnectiveError, UnknownConnective, InvalidSymbol, ArityMismatch

# Main processing functions
from .pvo import evaluate_expression, run_repl, main
