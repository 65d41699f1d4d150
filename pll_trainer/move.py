import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

FACES = ['R', 'U', 'F', 'L', 'D', 'B']
WIDE_FACES = [f + 'w' for f in FACES]
SLICES = ['M', 'E', 'S']
ROTATIONS = ['x', 'y', 'z']
KNOWN_FACES = FACES + WIDE_FACES + SLICES + ROTATIONS

SUFFIX_TURNS = {'': 1, "'": 3, '2': 2, "2'": 2}
TURN_SUFFIXES = {1: '', 2: '2', 3: "'"}

# Typographic primes people paste from web pages and chat apps
PRIMES = str.maketrans({'’': "'", '′': "'", '‘': "'"})

MOVE_PATTERN = re.compile(r"^([RUFLDBMESxyz]|[RUFLDB]w|[rufldb]w?)(2'|2|'|)$")


@dataclass(frozen=True)
class KnownMove:
    """A move the grammar understands: a face/axis and a quarter-turn count in {1, 2, 3}"""
    face: str
    turns: int

    def __post_init__(self):
        if self.face not in KNOWN_FACES:
            raise ValueError(f"Unknown face: {self.face}")
        if self.turns not in TURN_SUFFIXES:
            raise ValueError(f"Turn count must be 1, 2 or 3, got {self.turns}")

    def inverted(self) -> 'KnownMove':
        return KnownMove(self.face, 4 - self.turns)

    def __str__(self):
        return self.face + TURN_SUFFIXES[self.turns]


@dataclass(frozen=True)
class OpaqueToken:
    """A move-shaped token outside the grammar, kept verbatim"""
    text: str

    def inverted(self) -> 'OpaqueToken':
        if self.text.endswith("'"):
            return OpaqueToken(self.text[:-1])
        return OpaqueToken(self.text + "'")

    def __str__(self):
        return self.text


Move = Union[KnownMove, OpaqueToken]


def _canonical_face(base: str) -> str:
    """Map SiGN wide moves (r, rw) onto the WCA spelling (Rw)"""
    if base[0] in 'rufldb':
        return base[0].upper() + 'w'
    return base


def parse_move(token: str) -> Optional[KnownMove]:
    """Classify 'R', "U'", 'r2', "Fw2'" into a KnownMove, or None if outside the grammar"""
    match = MOVE_PATTERN.match(token.translate(PRIMES))
    if not match:
        return None
    base, suffix = match.groups()
    return KnownMove(_canonical_face(base), SUFFIX_TURNS[suffix])


def classify(token: str) -> Move:
    """Like parse_move, but wraps unrecognized tokens instead of returning None"""
    move = parse_move(token)
    if move is None:
        return OpaqueToken(token)
    return move


def simplify(moves: Iterable[Move]) -> List[Move]:
    """Cancel adjacent moves on the same face, e.g. R R R -> R' and R R' -> nothing"""
    result = []
    for move in moves:
        if isinstance(move, KnownMove) and result:
            prev = result[-1]
            if isinstance(prev, KnownMove) and prev.face == move.face:
                result.pop()
                combined = _combine_moves(prev, move)
                if combined:
                    result.append(combined)
                continue
        result.append(move)
    return result


def _combine_moves(m1: KnownMove, m2: KnownMove) -> Optional[KnownMove]:
    """Combine two moves on the same face"""
    total = (m1.turns + m2.turns) % 4
    if total == 0:
        return None
    return KnownMove(m1.face, total)


def invert_moves(moves: Iterable[Move]) -> List[Move]:
    """Reverse the order and undo each move"""
    return [move.inverted() for move in reversed(list(moves))]


def format_moves(moves: Iterable[Move]) -> str:
    return ' '.join(str(move) for move in moves)
