"""Annotation query expressions: conjunctions of comparison terms.

    type = "daily_leaderboard" && date = "2025-09-07" && total_traders > 10
"""
import json, re
from typing import Mapping, NamedTuple, Union

Value = Union[str, int]

class Term(NamedTuple):
    key: str
    op: str
    value: Value

_TERM = re.compile(r'\s*([A-Za-z_][A-Za-z0-9_]*)\s*(=|!=|<=|>=|<|>)\s*("(?:[^"\\]|\\.)*"|-?\d+)\s*(&&|$)')

def _literal(value: Value) -> str:
    if isinstance(value, bool):
        raise ValueError("boolean annotation values are not supported")
    if isinstance(value, int):
        return str(value)
    return json.dumps(str(value))

def term(key: str, op: str, value: Value) -> str:
    return f"{key} {op} {_literal(value)}"

def build_query(**equals: Value) -> str:
    """`build_query(type="x", date="y")` -> 'type = "x" && date = "y"'."""
    return " && ".join(term(k, "=", v) for k, v in equals.items())

def parse_query(expr: str) -> list[Term]:
    terms, pos = [], 0
    while True:
        m = _TERM.match(expr, pos)
        if not m:
            raise ValueError(f"unsupported query near: {expr[pos:].strip()!r}")
        key, op, raw, sep = m.groups()
        value: Value = json.loads(raw) if raw.startswith('"') else int(raw)
        terms.append(Term(key, op, value))
        if not sep:
            return terms
        pos = m.end()

_OPS = {
    "=": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}

def matches(terms: list[Term], strings: Mapping[str, str], numbers: Mapping[str, int]) -> bool:
    for t in terms:
        source = strings if isinstance(t.value, str) else numbers
        if t.key not in source:
            return False
        if not _OPS[t.op](source[t.key], t.value):
            return False
    return True
