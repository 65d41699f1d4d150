import json
import math
from dataclasses import dataclass
from statistics import mean, median
from typing import Dict, Iterable, List, Optional, Sequence

PENALTIES = ('OK', '+2', 'DNF')
PLUS_TWO_MS = 2000
# Solve log fields as exported by the timer, with their record attribute
LOG_FIELDS = {
    'id': 'id',
    'caseId': 'case_id',
    'group': 'group',
    'timeMs': 'time_ms',
    'penalty': 'penalty',
    'timestamp': 'timestamp',
}


class SolveLogError(ValueError):
    pass


@dataclass(frozen=True)
class SolveRecord:
    id: str
    case_id: str
    group: str
    time_ms: float
    penalty: str = 'OK'
    timestamp: float = 0.0


@dataclass(frozen=True)
class TimingStats:
    average: Optional[float]
    median: Optional[float]
    ao5: Optional[float]
    ao12: Optional[float]
    pb: Optional[float]


def apply_penalty(time_ms: float, penalty: str) -> Optional[float]:
    """Effective time in ms; None for a DNF"""
    if penalty == 'DNF':
        return None
    if penalty == '+2':
        return time_ms + PLUS_TWO_MS
    return time_ms


def _numeric_times(records: Iterable[SolveRecord]) -> List[float]:
    times = [apply_penalty(r.time_ms, r.penalty) for r in records]
    return [t for t in times if t is not None and math.isfinite(t)]


def compute_ao_n(records: Sequence[SolveRecord], n: int) -> Optional[float]:
    """Average of the last n solves without the best and worst one.

    A single DNF counts as the worst solve; more than one makes the
    average a DNF (None). Fewer than three finite times give None.
    """
    if len(records) < n:
        return None
    times = [apply_penalty(r.time_ms, r.penalty) for r in records[-n:]]
    dnfs = sum(t is None for t in times)
    if dnfs > 1:
        return None
    ranked = sorted(t for t in times if t is not None)
    if len(ranked) < 3:
        return None
    return mean(ranked[1:] if dnfs else ranked[1:-1])


def compute_stats(records: Sequence[SolveRecord]) -> TimingStats:
    times = _numeric_times(records)
    return TimingStats(
        average=mean(times) if times else None,
        median=median(times) if times else None,
        ao5=compute_ao_n(records, 5),
        ao12=compute_ao_n(records, 12),
        pb=min(times) if times else None,
    )


def format_time(ms: Optional[float]) -> str:
    """12.34 under a minute, 1:02.50 above"""
    if ms is None or not math.isfinite(ms):
        return '-'
    minutes, seconds = divmod(ms / 1000, 60)
    if minutes > 0:
        return f"{int(minutes)}:{seconds:05.2f}"
    return f"{seconds:.2f}"


def filter_solves(solves: Iterable[SolveRecord], case_id: Optional[str] = None,
                  group: Optional[str] = None) -> List[SolveRecord]:
    return [s for s in solves
            if (not case_id or s.case_id == case_id) and (not group or s.group == group)]


def _solve_from_dict(raw: Dict, index: int) -> SolveRecord:
    if not isinstance(raw, dict):
        raise SolveLogError(f"Solve {index} must be an object")
    values = {attr: raw[key] for key, attr in LOG_FIELDS.items() if key in raw}
    values.update({attr: raw[attr] for attr in LOG_FIELDS.values() if attr in raw})
    for attr in ('case_id', 'time_ms'):
        if attr not in values:
            raise SolveLogError(f"Solve {index} has no {attr}")
    time_ms = values['time_ms']
    if not isinstance(time_ms, (int, float)) or isinstance(time_ms, bool):
        raise SolveLogError(f"Solve {index} has a non-numeric time {time_ms!r}")
    penalty = values.get('penalty', 'OK')
    if penalty not in PENALTIES:
        raise SolveLogError(f"Solve {index} has unknown penalty {penalty!r}")
    return SolveRecord(
        id=str(values.get('id', index)),
        case_id=values['case_id'],
        group=values.get('group', ''),
        time_ms=time_ms,
        penalty=penalty,
        timestamp=values.get('timestamp', 0.0),
    )


def parse_solve_log(text: str) -> List[SolveRecord]:
    """Read exported solves: either a bare list or {"solves": [...]}"""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SolveLogError(f"Solve log is not valid JSON: {e}") from e
    if isinstance(data, dict) and isinstance(data.get('solves'), list):
        data = data['solves']
    if not isinstance(data, list):
        raise SolveLogError("Solve log must be a list of solves or an object with a solves list")
    return [_solve_from_dict(raw, i) for i, raw in enumerate(data)]


def load_solve_log(path: str) -> List[SolveRecord]:
    try:
        with open(path) as f:
            text = f.read()
    except OSError as e:
        raise SolveLogError(f"Cannot read solve log {path}: {e}") from e
    return parse_solve_log(text)
