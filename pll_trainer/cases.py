import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

from pll_trainer.engine import invert

logger = logging.getLogger(__name__)

GROUPS = ('EPLL', 'CPLL', 'Mixed')

PLL_GROUPS = {
    'EPLL': 'EPLL (edges only)',
    'CPLL': 'CPLL (corners only)',
    'Mixed': 'Mixed (corners and edges)',
}


@dataclass(frozen=True)
class PLLCase:
    """A PLL case and the algorithms that solve it"""
    id: str
    name: str
    group: str
    default_algs: Tuple[str, ...]
    recognition_hint: str
    alt_algs: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    # Takes the solved cube to this case: the inverse of the first default alg
    setup_alg: str = field(default='', compare=False)

    @property
    def canonical_alg(self) -> str:
        return self.default_algs[0]


_PLL_CASES_RAW = [
    dict(
        id='Aa', name='Aa corner cycle', group='CPLL',
        default_algs=("x L2 D2 L' U' L D2 L' U L'",),
        alt_algs=("x' R2 D2 R' U' R D2 R' U R'",),
        tags=('adjacent corners', 'A shape'),
        recognition_hint='One pair of matching adjacent corners, the other three corners cycle clockwise.',
    ),
    dict(
        id='Ab', name='Ab corner cycle', group='CPLL',
        default_algs=("x' L2 D2 L U L' D2 L U' L",),
        alt_algs=("x R2 D2 R U R' D2 R U' R",),
        tags=('adjacent corners', 'A shape, reversed'),
        recognition_hint='Like Aa, but the corners cycle counterclockwise.',
    ),
    dict(
        id='E', name='E corner swap', group='CPLL',
        default_algs=("x' L' U L D' L' U' L D L' U' L D' L' U L D",),
        tags=('diagonal corners', 'ring'),
        recognition_hint='All four corners are out of place and no side shows a full bar.',
    ),
    dict(
        id='H', name='H edge swap', group='EPLL',
        default_algs=('M2 U M2 U2 M2 U M2',),
        tags=('H shape', 'opposite edges'),
        recognition_hint='Both pairs of opposite edges swap; every side shows a checkerboard-like middle.',
    ),
    dict(
        id='Ua', name='Ua edge cycle', group='EPLL',
        default_algs=("M2 U M U2 M' U M2",),
        tags=('U shape', 'three edges clockwise'),
        recognition_hint='One solved bar, the remaining three edges cycle clockwise.',
    ),
    dict(
        id='Ub', name='Ub edge cycle', group='EPLL',
        default_algs=("M2 U' M U2 M' U' M2",),
        tags=('U shape', 'three edges counterclockwise'),
        recognition_hint='One solved bar, the remaining three edges cycle counterclockwise.',
    ),
    dict(
        id='Z', name='Z edge swap', group='EPLL',
        default_algs=("M' U M2 U M2 U M' U2 M2",),
        tags=('Z shape', 'adjacent edges'),
        recognition_hint='Two pairs of adjacent edges swap, forming a Z across the top.',
    ),
    dict(
        id='F', name='F permutation', group='Mixed',
        default_algs=("R' U' F' R U R' U' R' F R2 U' R' U' R U R' U R",),
        tags=('adjacent corners and edges', 'F shape'),
        recognition_hint='A solved 1x3 bar on one side; the opposite side looks like a T but edges move too.',
    ),
    dict(
        id='Ga', name='Ga permutation', group='Mixed',
        default_algs=("R2 U R' U R' U' R U' R2 U' D R' U R D'",),
        tags=('G shape', 'block and bar'),
        recognition_hint='A solved block and a fake block, block at the back left.',
    ),
    dict(
        id='Gb', name='Gb permutation', group='Mixed',
        default_algs=("R' U' R U D' R2 U R' U R U' R U' R2 D",),
        tags=('G shape', 'variant'),
        recognition_hint='Like Ga, but the fake block sits one position clockwise.',
    ),
    dict(
        id='Gc', name='Gc permutation', group='Mixed',
        default_algs=("R2 U' R U' R U R' U R2 U D' R U' R' D",),
        tags=('G shape', 'variant'),
        recognition_hint='One solved corner pair with a fake block in the back right.',
    ),
    dict(
        id='Gd', name='Gd permutation', group='Mixed',
        default_algs=("R U R' U' D R2 U' R U' R' U R' U R2 D'",),
        tags=('G shape', 'variant'),
        recognition_hint='One solved corner pair with the fake block in the front right; mirror of Gc.',
    ),
    dict(
        id='Ja', name='Ja permutation', group='Mixed',
        default_algs=("x R2 F R F' R U2 r' U r U2",),
        tags=('J shape', 'block on the right'),
        recognition_hint='A 2x1 block on the front, sitting on the right.',
    ),
    dict(
        id='Jb', name='Jb permutation', group='Mixed',
        default_algs=("R U R' F' R U R' U' R' F R2 U' R'",),
        tags=('J shape', 'block on the left'),
        recognition_hint='Mirror of Ja: the 2x1 block sits on the left.',
    ),
    dict(
        id='Ra', name='Ra permutation', group='Mixed',
        default_algs=("R U' R' U' R U R D R' U' R D' R' U2 R'",),
        tags=('R shape', 'block and three edges'),
        recognition_hint='A 2x1 block in front; the other side looks like a U perm.',
    ),
    dict(
        id='Rb', name='Rb permutation', group='Mixed',
        default_algs=("R2 F R U R U' R' F' R U2 R' U2 R",),
        tags=('R shape', 'mirror'),
        recognition_hint='Mirror of Ra with the block on the left.',
    ),
    dict(
        id='T', name='T permutation', group='Mixed',
        default_algs=("R U R' U' R' F R2 U' R' U' R U R' F'",),
        tags=('T shape', 'classic'),
        recognition_hint='Headlights on the left, a full bar in front with a T on the side.',
    ),
    dict(
        id='Na', name='Na permutation', group='Mixed',
        default_algs=("R U R' U R U R' F' R U R' U' R' F R2 U' R' U2 R U' R'",),
        tags=('N shape', 'diagonal swap'),
        recognition_hint='Two opposite pairs of blocks; every side looks scrambled.',
    ),
    dict(
        id='Nb', name='Nb permutation', group='Mixed',
        default_algs=("R' U R U' R' F' U' F R U R' F R' F' R U' R",),
        tags=('N shape', 'mirror'),
        recognition_hint='Mirror of Na; look at which way the corner pairs lean.',
    ),
    dict(
        id='V', name='V permutation', group='Mixed',
        default_algs=("R' U R' U' y R' F' R2 U' R' U R' F R F",),
        tags=('V shape', 'block in front right'),
        recognition_hint='A block at the front right and an arrow-like pattern on the other side.',
    ),
    dict(
        id='Y', name='Y permutation', group='Mixed',
        default_algs=("F R U' R' U' R U R' F' R U R' U' R' F R F'",),
        tags=('Y shape', 'diagonal corners and two edges'),
        recognition_hint='Two diagonal corners swap along with the front and left edges.',
    ),
]


def _build_case(raw: Dict) -> PLLCase:
    return PLLCase(**raw, setup_alg=invert(raw['default_algs'][0]))


PLL_CASES: Tuple[PLLCase, ...] = tuple(_build_case(raw) for raw in _PLL_CASES_RAW)
logger.debug("Built %d PLL cases", len(PLL_CASES))

_CASES_BY_ID = {case.id: case for case in PLL_CASES}

# OLL and F2L are placeholders for future libraries
CASE_LIBRARY_BY_TYPE: Dict[str, Tuple[PLLCase, ...]] = {
    'PLL': PLL_CASES,
    'OLL': (),
    'F2L': (),
}


def get_case(case_id: str) -> PLLCase:
    try:
        return _CASES_BY_ID[case_id]
    except KeyError:
        raise KeyError(f"Unknown case: {case_id}") from None


def cases_in_group(group: str) -> Tuple[PLLCase, ...]:
    if group not in GROUPS:
        raise KeyError(f"Unknown group: {group}")
    return tuple(case for case in PLL_CASES if case.group == group)
