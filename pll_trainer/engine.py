from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from pll_trainer.move import Move, classify, format_moves, invert_moves, simplify
from pll_trainer.notation import ParseError, parse_sequence

__all__ = [
    'ApplyResult',
    'IdentityResult',
    'ParseError',
    'ParsedAlg',
    'apply_to_case',
    'invert',
    'is_identity',
    'parse',
    'simplify_steps',
    'to_steps',
]


@dataclass(frozen=True)
class ParsedAlg:
    raw: str
    normalized: str
    steps: Tuple[str, ...]
    moves: Tuple[Move, ...]


@dataclass(frozen=True)
class IdentityResult:
    is_identity: bool
    simplified: str
    remaining_moves: int
    simplified_steps: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ApplyResult(IdentityResult):
    combined: str = ''


def parse(text: str) -> ParsedAlg:
    """Expand notation text into canonical steps. Raises ParseError."""
    moves = tuple(parse_sequence(text))
    steps = tuple(str(move) for move in moves)
    return ParsedAlg(raw=text, normalized=' '.join(steps), steps=steps, moves=moves)


def to_steps(text: str) -> List[str]:
    return list(parse(text).steps)


def simplify_steps(steps: Iterable[str]) -> List[str]:
    """Simplify already-split steps, e.g. ['R', 'R', 'R'] -> ["R'"]"""
    return [str(move) for move in simplify(classify(step) for step in steps)]


def _identity_result(moves: Iterable[Move]) -> Tuple[bool, str, int, Tuple[str, ...]]:
    steps = tuple(str(move) for move in simplify(moves))
    return len(steps) == 0, ' '.join(steps), len(steps), steps


def is_identity(text: str) -> IdentityResult:
    """Check whether the moves in text cancel down to nothing"""
    return IdentityResult(*_identity_result(parse_sequence(text)))


def _setup_alg(case: Any) -> str:
    if isinstance(case, Mapping):
        return case['setup_alg']
    return case.setup_alg


def apply_to_case(text: str, case: Any) -> ApplyResult:
    """Check whether text solves the case, i.e. setup followed by text is the identity.

    ``case`` is a PLLCase or any object or mapping carrying ``setup_alg``.
    Cancellation across the setup/solution boundary is allowed.
    """
    setup = _setup_alg(case)
    moves = parse_sequence(setup) + parse_sequence(text)
    combined = f"{setup} {text}".strip()
    return ApplyResult(*_identity_result(moves), combined=combined)


def invert(text: str) -> str:
    """Return the sequence that undoes text, e.g. "R U R'" -> "R U' R'" """
    return format_moves(invert_moves(parse_sequence(text)))
