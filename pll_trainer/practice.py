import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from pll_trainer.cases import PLLCase

logger = logging.getLogger(__name__)

# Proficiency levels: 1 = new, 2 = learning, 3 = fluent
LEVELS = (1, 2, 3)
DEFAULT_LEVEL = 1
LEVEL_LABELS = {1: 'new', 2: 'learning', 3: 'fluent'}
# Weaker cases come up more often in weighted practice
LEVEL_WEIGHTS = {1: 3, 2: 2, 3: 1}

MODES = ('balanced', 'weighted')


@dataclass
class PracticeConfig:
    enabled_groups: List[str] = field(default_factory=lambda: ['EPLL', 'CPLL', 'Mixed'])
    excluded_case_ids: List[str] = field(default_factory=list)
    mode: str = 'weighted'


def get_level(proficiency: Dict[str, int], case_id: str) -> int:
    return proficiency.get(case_id, DEFAULT_LEVEL)


def level_label(level: int) -> str:
    return LEVEL_LABELS.get(level, LEVEL_LABELS[3])


def level_weight(level: int) -> int:
    return LEVEL_WEIGHTS.get(level, LEVEL_WEIGHTS[3])


def summarize_proficiency(cases: Iterable[PLLCase], proficiency: Dict[str, int]) -> Dict[int, int]:
    """Count cases per level"""
    summary = {level: 0 for level in LEVELS}
    for case in cases:
        level = get_level(proficiency, case.id)
        summary[level if level in summary else 3] += 1
    return summary


def filter_cases_for_practice(cases: Iterable[PLLCase], config: PracticeConfig) -> List[PLLCase]:
    return [case for case in cases
            if case.group in config.enabled_groups and case.id not in config.excluded_case_ids]


def choose_random_case(candidates: Sequence[PLLCase], proficiency: Dict[str, int], mode: str,
                       rng: Optional[random.Random] = None) -> Optional[PLLCase]:
    """Pick the next case to practice, or None when nothing is enabled"""
    if not candidates:
        return None
    rng = rng or random
    if mode == 'balanced':
        case = rng.choice(candidates)
    else:
        weights = [level_weight(get_level(proficiency, c.id)) for c in candidates]
        case = rng.choices(candidates, weights=weights)[0]
    logger.debug("Picked case %s (%s mode)", case.id, mode)
    return case


def get_primary_alg(preferences: Dict[str, str], case: PLLCase) -> str:
    """The user's preferred alg for the case, falling back to its canonical alg"""
    stored = (preferences.get(case.id) or '').strip()
    return stored or case.canonical_alg
