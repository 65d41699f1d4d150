from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List

import numpy as np
from magiccube import Cube, Face

from pll_trainer.move import KnownMove, Move, TURN_SUFFIXES
from pll_trainer.notation import ParseError, parse_sequence

FACE_ORDER = ['U', 'L', 'F', 'R', 'B', 'D']
SIDE_FACES = ['L', 'F', 'R', 'B']

# magiccube turns outer faces and whole-cube rotations (X Y Z); slices and wide
# moves are rewritten as a face turn plus a rotation on the same axis.
EXPANSIONS = {
    'M': [('R', 1), ('L', -1), ('X', -1)],
    'E': [('U', 1), ('D', -1), ('Y', -1)],
    'S': [('F', -1), ('B', 1), ('Z', 1)],
    'Rw': [('L', 1), ('X', 1)],
    'Lw': [('R', 1), ('X', -1)],
    'Uw': [('D', 1), ('Y', 1)],
    'Dw': [('U', 1), ('Y', -1)],
    'Fw': [('B', 1), ('Z', 1)],
    'Bw': [('F', 1), ('Z', -1)],
    'x': [('X', 1)],
    'y': [('Y', 1)],
    'z': [('Z', 1)],
}

# Every whole-cube orientation: pick the top, then spin around it
ORIENTATIONS = [f"{top} {spin}".strip()
                for top in ('', 'x', 'x2', "x'", 'z', "z'")
                for spin in ('', 'y', 'y2', "y'")]


@dataclass
class CubeState:
    """Facelet colors of a 3x3 cube, one 3x3 array per face"""
    faces: Dict[str, np.ndarray]

    @classmethod
    def from_cube(cls, cube: Cube) -> 'CubeState':
        all_faces = cube.get_all_faces()
        return cls({
            f: np.array([[color.name for color in row] for row in all_faces[getattr(Face, f)]])
            for f in FACE_ORDER
        })

    def centers(self) -> List[str]:
        return [str(self.faces[f][1, 1]) for f in FACE_ORDER]

    def is_solved(self) -> bool:
        """Every face a single color, whatever the orientation"""
        return all(np.all(self.faces[f] == self.faces[f][1, 1]) for f in FACE_ORDER)

    def is_last_layer_only(self) -> bool:
        """Only the top-layer stickers of the side faces differ from their centers.

        The U face must be one color and D plus the lower two rows of every
        side face must match their own centers, whatever the orientation.
        """
        if not np.all(self.faces['U'] == self.faces['U'][1, 1]):
            return False
        if not np.all(self.faces['D'] == self.faces['D'][1, 1]):
            return False
        return all(np.all(self.faces[f][1:] == self.faces[f][1, 1]) for f in SIDE_FACES)

    def to_string(self) -> str:
        """Unfolded net with U on top and D at the bottom"""
        def row(f, i):
            return ' '.join(self.faces[f][i])

        pad = ' ' * 8
        lines = [pad + row('U', i) for i in range(3)]
        lines.append('')
        lines += ['   '.join(row(f, i) for f in SIDE_FACES) for i in range(3)]
        lines.append('')
        lines += [pad + row('D', i) for i in range(3)]
        return '\n'.join(lines)

    def __eq__(self, other):
        if not isinstance(other, CubeState):
            return NotImplemented
        return all(np.array_equal(self.faces[f], other.faces[f]) for f in FACE_ORDER)


def _to_magiccube(moves: List[Move]) -> str:
    """Rewrite moves in the notation magiccube understands"""
    parts = []
    for move in moves:
        if not isinstance(move, KnownMove):
            raise ParseError(f"Cannot simulate unrecognized move {move}")
        for letter, sign in EXPANSIONS.get(move.face, [(move.face, 1)]):
            turns = (sign * move.turns) % 4
            parts.append(letter + TURN_SUFFIXES[turns])
    return ' '.join(parts)


def _apply(moves: List[Move]) -> CubeState:
    cube = Cube(3)
    notation = _to_magiccube(moves)
    if notation:
        cube.rotate(notation)
    return CubeState.from_cube(cube)


@lru_cache(maxsize=None)
def solved_state() -> CubeState:
    return _apply([])


def simulate(text: str, normalize: bool = False) -> CubeState:
    """Apply text to a solved cube.

    With ``normalize`` the result is re-oriented to hide any net whole-cube
    rotation in text. A last-layer pattern is turned so the changed layer is
    on top; anything else gets its centers back where the solved cube has them.
    """
    moves = parse_sequence(text)
    if not normalize:
        return _apply(moves)
    target = solved_state().centers()
    states = [_apply(moves + parse_sequence(rotation)) for rotation in ORIENTATIONS]
    home = next((s for s in states if s.centers() == target), None)
    if home is None:
        raise RuntimeError(f"No orientation restores the centers of {text!r}")
    if home.is_last_layer_only():
        return home
    return next((s for s in states if s.is_last_layer_only()), home)
