"""Expand cube notation text into a flat list of moves.

Accepts WCA and SiGN spellings, ``(group)N`` and ``[group]xN`` repeats,
a trailing prime on a group to invert it, commutators ``[A, B]``,
conjugates ``[A: B]`` and ``//`` line comments.
"""
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from pll_trainer.move import PRIMES, Move, classify, invert_moves

CLOSERS = {'(': ')', '[': ']'}
# Longest expansion a single piece of text may produce
MAX_MOVES = 1000
# Characters allowed right after a closing delimiter and its repeat suffix
BOUNDARY = set('()[],:/')

TOKEN_PATTERN = re.compile(r"""
    (?P<space>\s+)
  | (?P<comment>//[^\n]*)
  | (?P<open>[(\[])
  | (?P<close>[)\]])(?P<repeat>x?\d+)?(?P<prime>')?
  | (?P<sep>[,:])
  | (?P<move>\d*[A-Za-z]+\d*'?)
""", re.VERBOSE)


class ParseError(ValueError):
    """Raised when notation text cannot be expanded into moves"""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position


@dataclass
class _Token:
    kind: str
    text: str
    pos: int
    count: int = 1
    inverse: bool = False


def _tokenize(text: str) -> Iterator[_Token]:
    pos = 0
    while pos < len(text):
        m = TOKEN_PATTERN.match(text, pos)
        if not m:
            raise ParseError(f"Unexpected character {text[pos]!r} at position {pos}", pos)
        kind = 'close' if m.group('close') else m.lastgroup
        end = m.end()
        if kind == 'close':
            if end < len(text) and not text[end].isspace() and text[end] not in BOUNDARY:
                raise ParseError(f"Malformed repeat after {m.group('close')!r} at position {m.start()}", m.start())
            count = 1
            if m.group('repeat'):
                count = int(m.group('repeat').lstrip('x'))
                if count == 0:
                    raise ParseError(f"Repeat count must be at least 1 at position {m.start()}", m.start())
            yield _Token('close', m.group('close'), m.start(), count, bool(m.group('prime')))
        elif kind not in ('space', 'comment'):
            yield _Token(kind, m.group(kind), m.start())
        pos = end


class _Parser:
    def __init__(self, text: str):
        self.tokens = list(_tokenize(text))
        self.index = 0

    def _next(self) -> Optional[_Token]:
        if self.index >= len(self.tokens):
            return None
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse(self) -> List[Move]:
        moves = []
        while True:
            token = self._next()
            if token is None:
                _check_length(len(moves), None)
                return moves
            if token.kind == 'move':
                moves.append(classify(token.text))
            elif token.kind == 'open':
                moves.extend(self._group(token))
            elif token.kind == 'close':
                raise ParseError(f"Unmatched {token.text!r} at position {token.pos}", token.pos)
            else:
                raise ParseError(f"{token.text!r} outside of brackets at position {token.pos}", token.pos)

    def _group(self, opener: _Token) -> List[Move]:
        sections = [[]]
        separators = []
        while True:
            token = self._next()
            if token is None:
                raise ParseError(f"Unclosed {opener.text!r} opened at position {opener.pos}", opener.pos)
            if token.kind == 'move':
                sections[-1].append(classify(token.text))
            elif token.kind == 'open':
                sections[-1].extend(self._group(token))
            elif token.kind == 'sep':
                if opener.text != '[':
                    raise ParseError(f"{token.text!r} is only allowed inside [ ] at position {token.pos}", token.pos)
                separators.append(token)
                sections.append([])
            elif token.text != CLOSERS[opener.text]:
                raise ParseError(
                    f"Mismatched {token.text!r} at position {token.pos} for {opener.text!r} at position {opener.pos}",
                    token.pos)
            else:
                body = _combine_sections(sections, separators)
                _check_length(len(body) * token.count, token.pos)
                body = body * token.count
                if token.inverse:
                    body = invert_moves(body)
                return body


def _check_length(length: int, pos: Optional[int]):
    if length > MAX_MOVES:
        where = f" at position {pos}" if pos is not None else ""
        raise ParseError(f"Expansion of {length} moves exceeds the limit of {MAX_MOVES}{where}", pos)


def _combine_sections(sections: List[List[Move]], separators: List[_Token]) -> List[Move]:
    if not separators:
        return sections[0]
    if len(separators) > 1:
        sep = separators[1]
        raise ParseError(f"Unexpected {sep.text!r} at position {sep.pos}", sep.pos)
    sep = separators[0]
    a, b = sections
    if not a or not b:
        raise ParseError(f"Empty side of {sep.text!r} at position {sep.pos}", sep.pos)
    if sep.text == ',':
        return a + b + invert_moves(a) + invert_moves(b)
    return a + b + invert_moves(a)


def parse_sequence(text: str) -> List[Move]:
    """Parse "R U R' (U R)2 [R, U]" into a flat list of moves"""
    return _Parser(text.translate(PRIMES)).parse()
