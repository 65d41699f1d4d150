import json

import pytest

from pll_trainer.timing import (
    SolveLogError,
    SolveRecord,
    apply_penalty,
    compute_ao_n,
    compute_stats,
    filter_solves,
    format_time,
    load_solve_log,
    parse_solve_log,
)


def solves(*times, penalties=None, case_id='T', group='Mixed'):
    penalties = penalties or ['OK'] * len(times)
    return [SolveRecord(id=str(i), case_id=case_id, group=group, time_ms=t, penalty=p, timestamp=i)
            for i, (t, p) in enumerate(zip(times, penalties))]


# Penalty Tests
def test_apply_penalty():
    assert apply_penalty(1500, 'OK') == 1500
    assert apply_penalty(1500, '+2') == 3500
    assert apply_penalty(1500, 'DNF') is None


# Average Tests
def test_ao5_drops_best_and_worst():
    records = solves(1000, 2000, 3000, 4000, 10000)
    assert compute_ao_n(records, 5) == 3000


def test_ao5_uses_last_window():
    records = solves(99999, 1000, 2000, 3000, 4000, 5000)
    assert compute_ao_n(records, 5) == 3000


def test_ao5_not_enough_solves():
    assert compute_ao_n(solves(1000, 2000, 3000, 4000), 5) is None


def test_ao5_one_dnf_counts_as_worst():
    records = solves(1000, 2000, 3000, 4000, 500, penalties=['OK', 'OK', 'OK', 'OK', 'DNF'])
    assert compute_ao_n(records, 5) == 3000


def test_ao5_two_dnfs():
    records = solves(1000, 2000, 3000, 4000, 500, penalties=['DNF', 'OK', 'OK', 'OK', 'DNF'])
    assert compute_ao_n(records, 5) is None


def test_ao3_one_dnf_needs_three_times():
    """With a DNF only two finite times are left, too few to trim"""
    records = solves(1000, 2000, 3000, penalties=['OK', 'DNF', 'OK'])
    assert compute_ao_n(records, 3) is None
    assert compute_ao_n(solves(1000, 2000, 3000), 3) == 2000


def test_compute_stats():
    records = solves(1000, 2000, 3000, 4000, 5000, penalties=['OK', '+2', 'OK', 'DNF', 'OK'])
    stats = compute_stats(records)
    # Effective times: 1000, 4000, 3000, 5000
    assert stats.average == 3250
    assert stats.median == 3500
    assert stats.pb == 1000
    assert stats.ao5 == 4000
    assert stats.ao12 is None


def test_compute_stats_empty():
    stats = compute_stats([])
    assert stats.average is None
    assert stats.median is None
    assert stats.pb is None


# Formatting Tests
@pytest.mark.parametrize('ms, text', [
    (None, '-'),
    (float('inf'), '-'),
    (1234, '1.23'),
    (12340, '12.34'),
    (62500, '1:02.50'),
    (0, '0.00'),
])
def test_format_time(ms, text):
    assert format_time(ms) == text


def test_filter_solves():
    records = solves(1000, case_id='T') + solves(2000, case_id='H', group='EPLL')
    assert [r.case_id for r in filter_solves(records, case_id='H')] == ['H']
    assert [r.case_id for r in filter_solves(records, group='Mixed')] == ['T']
    assert len(filter_solves(records)) == 2


# Solve Log Tests
EXPORTED = [
    {'id': 'a', 'caseId': 'T', 'group': 'Mixed', 'timeMs': 2100, 'penalty': 'OK', 'timestamp': 1},
    {'id': 'b', 'caseId': 'H', 'group': 'EPLL', 'timeMs': 1500, 'penalty': '+2', 'timestamp': 2},
]


def test_parse_solve_log_bare_list():
    records = parse_solve_log(json.dumps(EXPORTED))
    assert records[0] == SolveRecord(id='a', case_id='T', group='Mixed', time_ms=2100, penalty='OK', timestamp=1)
    assert records[1].penalty == '+2'


def test_parse_solve_log_export_payload():
    payload = {'version': 1, 'exportedAt': '2024-01-01T00:00:00Z', 'solves': EXPORTED}
    assert [r.id for r in parse_solve_log(json.dumps(payload))] == ['a', 'b']


def test_parse_solve_log_defaults():
    records = parse_solve_log('[{"case_id": "Ua", "time_ms": 1800}]')
    assert records == [SolveRecord(id='0', case_id='Ua', group='', time_ms=1800)]


@pytest.mark.parametrize('text', [
    '{not json',
    '{"version": 1}',
    '"solves"',
    '[1, 2]',
    '[{"caseId": "T"}]',
    '[{"caseId": "T", "timeMs": "fast"}]',
    '[{"caseId": "T", "timeMs": 1000, "penalty": "DNS"}]',
])
def test_parse_solve_log_errors(text):
    with pytest.raises(SolveLogError):
        parse_solve_log(text)


def test_load_solve_log(tmp_path):
    path = tmp_path / 'solves.json'
    path.write_text(json.dumps({'solves': EXPORTED}))
    assert len(load_solve_log(str(path))) == 2
    with pytest.raises(SolveLogError):
        load_solve_log(str(tmp_path / 'missing.json'))
