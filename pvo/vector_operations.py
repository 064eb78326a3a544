"""
Vector Operations Module

Pure functional implementation of the truth-vector algebra used by PVO: canonical
enumeration of input assignments, encoding and decoding of truth vectors, evaluation
of a vector at an assignment, and the composition that threads one function's output
into another's last input.

A truth vector is a read-only one-dimensional numpy boolean array of length 2**n,
where position i holds the function's output for the i-th assignment of
`enumerate_inputs(n)`.
"""

import logging
from enum import Enum
from functools import lru_cache, reduce
from typing import List, Sequence, Union
import numpy as np

from .error_handling import InvalidSymbol, ArityMismatch
from .logging_utils import log_vector_operation

logger = logging.getLogger(__name__)


class TruthSymbol(Enum):
    TRUE = True
    FALSE = False


# Single-character spellings, valid both in truth vectors and assignments
SYMBOL_SPELLINGS = {
    "t": TruthSymbol.TRUE,
    "1": TruthSymbol.TRUE,
    "f": TruthSymbol.FALSE,
    "0": TruthSymbol.FALSE,
}

# Whole-word spellings, valid only in assignments
WORD_SPELLINGS = {
    "true": TruthSymbol.TRUE,
    "false": TruthSymbol.FALSE,
}


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array

def arity_of(vector: Union[np.ndarray, Sequence[bool]]) -> int:
    """
    Number of inputs of the function a truth vector represents.

    Args:
        vector: Truth vector

    Returns:
        int: log2 of the vector length

    Raises:
        ValueError: If the length is not a power of two
    """
    length = len(vector)
    if length < 1 or length & (length - 1):
        raise ValueError(f"Truth vector length must be a power of two, got {length}")
    return length.bit_length() - 1

@lru_cache(maxsize=None)
def enumerate_inputs(n: int) -> np.ndarray:
    """
    Generate every assignment of n boolean variables in canonical order.

    Rows are sorted by descending binary value with the first variable as the most
    significant bit, so for n=2 the order is (t, t), (t, f), (f, t), (f, f).

    Args:
        n (int): Number of variables

    Returns:
        np.ndarray: Read-only boolean array of shape (2**n, n), shared between calls
    """
    if n < 0:
        raise ValueError(f"Number of inputs must be non-negative, got {n}")

    values = np.arange(2 ** n - 1, -1, -1)
    shifts = np.arange(n - 1, -1, -1)
    table = ((values[:, np.newaxis] >> shifts[np.newaxis, :]) & 1).astype(bool)
    return _freeze(table)

def parse_truth_symbol(text: str) -> TruthSymbol:
    """
    Parse one truth symbol ('t', 'f', '1', '0', 'true' or 'false').

    Raises:
        InvalidSymbol: For any other spelling
    """
    if text in SYMBOL_SPELLINGS:
        return SYMBOL_SPELLINGS[text]
    if text in WORD_SPELLINGS:
        return WORD_SPELLINGS[text]
    raise InvalidSymbol(text)

def decode_vector(code: str) -> np.ndarray:
    """
    Decode a literal truth vector such as "tfff".

    Characters map left to right onto vector positions. Grouping delimiters are not
    accepted here; callers strip them first.

    Args:
        code (str): Encoded truth vector

    Returns:
        np.ndarray: Read-only boolean truth vector

    Raises:
        InvalidSymbol: If the length is not a positive power of two or a character is
                       not a truth symbol
    """
    length = len(code)
    if length < 1 or length & (length - 1):
        raise InvalidSymbol(code, "length is not a power of two")

    # Iterating a string yields single characters, so the words "true"/"false" never match
    values = [parse_truth_symbol(char).value for char in code]
    return _freeze(np.array(values, dtype=bool))

def encode_vector(vector: np.ndarray, group_width: int = 4, delimiter: str = ".") -> str:
    """
    Encode a truth vector as 't'/'f' characters.

    A delimiter is inserted every `group_width` characters counted from the right-hand
    end; the character order itself is unchanged.

    Args:
        vector (np.ndarray): Truth vector
        group_width (int): Characters per block
        delimiter (str): Block separator

    Returns:
        str: Encoded vector, e.g. "tttt.tfff"
    """
    arity_of(vector)
    if group_width < 1:
        raise ValueError(f"Group width must be positive, got {group_width}")

    chars = "".join("t" if value else "f" for value in vector)
    head = len(chars) % group_width
    groups = [chars[:head]] if head else []
    groups.extend(chars[i:i + group_width] for i in range(head, len(chars), group_width))
    return delimiter.join(groups)

def decode_assignment(text: str) -> np.ndarray:
    """
    Decode a user-entered assignment such as "tt", "10" or "true".

    Whitespace between symbols is ignored. A whitespace-separated word equal to
    "true" or "false" counts as a single symbol; any other word is read one
    character at a time.

    Args:
        text (str): Assignment text

    Returns:
        np.ndarray: Boolean array, one entry per variable

    Raises:
        InvalidSymbol: If a character is not a truth symbol
    """
    symbols: List[TruthSymbol] = []
    for word in text.split():
        if word in WORD_SPELLINGS:
            symbols.append(parse_truth_symbol(word))
        else:
            symbols.extend(parse_truth_symbol(char) for char in word)

    return _freeze(np.array([symbol.value for symbol in symbols], dtype=bool))

def evaluate_vector(vector: np.ndarray, assignment: Union[np.ndarray, Sequence[bool]]) -> bool:
    """
    Evaluate a truth vector at one assignment.

    Args:
        vector (np.ndarray): Truth vector of arity n
        assignment: Sequence of n booleans in canonical variable order

    Returns:
        bool: Function output for the assignment

    Raises:
        ArityMismatch: If the assignment length is not the vector's arity
    """
    arity = arity_of(vector)
    assignment = np.asarray(assignment, dtype=bool)
    if assignment.ndim != 1 or assignment.shape[0] != arity:
        raise ArityMismatch(arity, assignment.size)

    inputs = enumerate_inputs(arity)
    position = np.flatnonzero((inputs == assignment).all(axis=1))[0]
    return bool(vector[position])

def compose_vectors(f: np.ndarray, g: np.ndarray) -> np.ndarray:
    """
    Compose two truth vectors into one of arity a + b - 1.

    For every combined assignment X, `f` reads the trailing a entries of X and its
    output becomes the last input of `g`, which reads the leading b - 1 entries of X
    directly.

    Args:
        f (np.ndarray): Inner truth vector of arity a (a may be 0)
        g (np.ndarray): Outer truth vector of arity b (b >= 1)

    Returns:
        np.ndarray: Read-only truth vector of length 2**(a + b - 1)

    Raises:
        ArityMismatch: If g is a constant (arity 0)
    """
    a = arity_of(f)
    b = arity_of(g)
    if b == 0:
        raise ArityMismatch(1, 0)

    combined = enumerate_inputs(a + b - 1)
    result = np.empty(combined.shape[0], dtype=bool)
    for i, row in enumerate(combined):
        leading, trailing = row[:b - 1], row[b - 1:]
        inner = evaluate_vector(f, trailing)
        result[i] = evaluate_vector(g, np.append(leading, inner))

    log_vector_operation(
        "compose",
        {"f": f, "g": g},
        {"result": result},
        {"arities": [a, b], "result_arity": a + b - 1}
    )
    return _freeze(result)

def reduce_vectors(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """
    Left-fold truth vectors through `compose_vectors`.

    compose(compose(v1, v2), v3) ... ; a single vector is returned unchanged.

    Raises:
        ValueError: If no vectors are given
    """
    if not vectors:
        raise ValueError("Cannot reduce an empty list of vectors")
    return reduce(compose_vectors, vectors)
