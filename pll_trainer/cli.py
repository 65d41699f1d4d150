import argparse
import logging
import random
import sys

from pll_trainer.cases import PLL_CASES, PLL_GROUPS, cases_in_group, get_case
from pll_trainer.config import ConfigError, load_settings
from pll_trainer.engine import ParseError, apply_to_case, invert, is_identity, parse
from pll_trainer.practice import (
    LEVEL_LABELS,
    choose_random_case,
    filter_cases_for_practice,
    get_level,
    get_primary_alg,
    level_label,
    summarize_proficiency,
)
from pll_trainer.state import simulate
from pll_trainer.timing import SolveLogError, compute_stats, filter_solves, format_time, load_solve_log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pll-trainer', description='Check and practice PLL algorithms')
    parser.add_argument('-c', '--config', help='JSON practice config')
    parser.add_argument('-v', '--verbose', action='store_true')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('parse', help='Expand an algorithm into single moves')
    p.add_argument('alg')
    p = sub.add_parser('check', help='Simplify an algorithm and report whether it cancels out')
    p.add_argument('alg')
    p = sub.add_parser('invert', help='Print the inverse of an algorithm')
    p.add_argument('alg')
    p = sub.add_parser('verify', help='Check that an algorithm solves a case')
    p.add_argument('case_id')
    p.add_argument('alg')
    p = sub.add_parser('cases', help='List the case library')
    p.add_argument('--group', choices=list(PLL_GROUPS))
    p = sub.add_parser('show', help='Show a case with its setup and pattern')
    p.add_argument('case_id')
    p = sub.add_parser('pick', help='Pick cases to practice')
    p.add_argument('--count', type=int, default=1)
    p = sub.add_parser('stats', help='Summarize times from an exported solve log')
    p.add_argument('log', help='JSON solve log')
    p.add_argument('--case', dest='case_id')
    p.add_argument('--group', choices=list(PLL_GROUPS))
    return parser


def _cmd_parse(args, settings):
    print(parse(args.alg).normalized)
    return 0


def _cmd_check(args, settings):
    result = is_identity(args.alg)
    if result.is_identity:
        print('identity')
        return 0
    print(f"{result.remaining_moves} moves remain: {result.simplified}")
    return 1


def _cmd_invert(args, settings):
    print(invert(args.alg))
    return 0


def _cmd_verify(args, settings):
    case = get_case(args.case_id)
    result = apply_to_case(args.alg, case)
    if result.is_identity:
        print(f"{case.id}: solved")
        return 0
    print(f"{case.id}: not solved, {result.remaining_moves} moves remain: {result.simplified}")
    return 1


def _cmd_cases(args, settings):
    cases = cases_in_group(args.group) if args.group else PLL_CASES
    for case in cases:
        level = level_label(get_level(settings.proficiency, case.id))
        print(f"{case.id:<3} {case.group:<6} {level:<9} {get_primary_alg(settings.preferred_algs, case)}")
    summary = summarize_proficiency(cases, settings.proficiency)
    print(', '.join(f"{count} {LEVEL_LABELS[level]}" for level, count in summary.items()))
    return 0


def _cmd_show(args, settings):
    case = get_case(args.case_id)
    print(f"{case.name} [{PLL_GROUPS[case.group]}]")
    print(f"Solve: {get_primary_alg(settings.preferred_algs, case)}")
    print(f"Setup: {case.setup_alg}")
    print(case.recognition_hint)
    print()
    print(simulate(case.setup_alg, normalize=True).to_string())
    return 0


def _cmd_pick(args, settings):
    rng = random.Random(settings.seed)
    candidates = filter_cases_for_practice(PLL_CASES, settings.practice)
    for _ in range(args.count):
        case = choose_random_case(candidates, settings.proficiency, settings.practice.mode, rng)
        if case is None:
            print('No cases enabled', file=sys.stderr)
            return 1
        print(f"{case.id}: {case.setup_alg}")
    return 0


def _cmd_stats(args, settings):
    solves = filter_solves(load_solve_log(args.log), case_id=args.case_id, group=args.group)
    stats = compute_stats(solves)
    print(f"solves: {len(solves)}")
    for label, value in (('average', stats.average), ('median', stats.median), ('ao5', stats.ao5),
                         ('ao12', stats.ao12), ('best', stats.pb)):
        print(f"{label}: {format_time(value)}")
    return 0


COMMANDS = {
    'parse': _cmd_parse,
    'check': _cmd_check,
    'invert': _cmd_invert,
    'verify': _cmd_verify,
    'cases': _cmd_cases,
    'show': _cmd_show,
    'pick': _cmd_pick,
    'stats': _cmd_stats,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s - %(message)s',
    )
    try:
        settings = load_settings(args.config)
        return COMMANDS[args.command](args, settings)
    except (ParseError, ConfigError, SolveLogError) as e:
        logging.debug(f"{args.command} failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2
    except KeyError as e:
        logging.debug(f"{args.command} failed", exc_info=True)
        print(f"error: {e.args[0]}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
