"""
Alias Resolver

Maps a connective name to its truth vector. A name may be an alias ("and"), a
truth-table code ("kpq") or a literal truth vector ("tfff"). Resolution takes at
most one hop through the alias table followed by one hop through the truth table.
"""

import logging
from typing import List, Mapping, Optional, Tuple
import numpy as np

from .connective_tables import ALIASES, TRUTH_TABLE
from .error_handling import UnknownConnective
from .vector_operations import SYMBOL_SPELLINGS, decode_vector

logger = logging.getLogger(__name__)

Hop = Tuple[str, str]


def is_literal(name: str) -> bool:
    """Whether `name` is spelled entirely with truth symbols."""
    return bool(name) and all(char in SYMBOL_SPELLINGS for char in name)

def resolve_with_trace(name: str,
                       aliases: Optional[Mapping[str, str]] = None,
                       table: Optional[Mapping[str, str]] = None) -> Tuple[np.ndarray, List[Hop]]:
    """
    Resolve a connective name, recording each lookup.

    Args:
        name (str): Alias, truth-table code or literal truth vector
        aliases (Mapping[str, str], optional): Alias table, defaults to ALIASES
        table (Mapping[str, str], optional): Truth table, defaults to TRUTH_TABLE

    Returns:
        Tuple[np.ndarray, List[Hop]]: Truth vector and the (name, replacement) hops
                                      taken, e.g. [("and", "kpq"), ("kpq", "tfff")]

    Raises:
        UnknownConnective: If the name matches no table and is not a literal
        InvalidSymbol: If a literal has a length that is not a power of two
    """
    aliases = ALIASES if aliases is None else aliases
    table = TRUTH_TABLE if table is None else table

    hops: List[Hop] = []
    code = name
    if code in aliases:
        hops.append((code, aliases[code]))
        code = aliases[code]
    if code in table:
        hops.append((code, table[code]))
        code = table[code]

    if not is_literal(code):
        # After a hop this can only mean an alias pointing nowhere
        raise UnknownConnective(code)

    for source, target in hops:
        logger.debug("Resolved %s = %s", source, target)

    return decode_vector(code), hops

def resolve_name(name: str,
                 aliases: Optional[Mapping[str, str]] = None,
                 table: Optional[Mapping[str, str]] = None) -> np.ndarray:
    """Resolve a connective name to its truth vector."""
    vector, _ = resolve_with_trace(name, aliases, table)
    return vector
