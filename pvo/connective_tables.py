"""
Connective Tables

Static lookup data for the 16 binary connectives. Codes follow Polish notation
(`kpq` is conjunction, `apq` disjunction, ...); each code maps to the encoded
truth vector of the connective over the canonical input order
(p, q) = (t, t), (t, f), (f, t), (f, f).
"""

from types import MappingProxyType

TRUTH_TABLE = MappingProxyType({
    "opq": "ffff",
    "xpq": "ffft",
    "mpq": "fftf",
    "fpq": "fftt",
    "lpq": "ftff",
    "gpq": "ftft",
    "jpq": "fttf",
    "dpq": "fttt",
    "kpq": "tfff",
    "epq": "tfft",
    "hpq": "tftf",
    "cpq": "tftt",
    "llpq": "ttff",
    "bpq": "ttft",
    "apq": "tttf",
    "vpq": "tttt",
})

ALIASES = MappingProxyType({
    "false": "opq",
    "true": "vpq",
    "nor": "xpq",
    "xor": "jpq",
    "nand": "dpq",
    "and": "kpq",
    "xnor": "epq",
    "or": "apq",

    "p": "lpq",
    "q": "hpq",
    "pneg": "fpq",
    "qneg": "gpq",

    "cnon": "mpq",
    "mnon": "lpq",
    "minpl": "cpq",
    "cinpl": "bpq",
})

# Literals listed alongside the tables in the help dump
BOOLEAN_LITERALS = ("true", "false")
