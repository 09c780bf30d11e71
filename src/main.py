#!/usr/bin/env python3
"""
Command line entry point for the bracket engine.

Usage:
    python src/main.py show 8
    python src/main.py show 12 --generic
    python src/main.py generate data/teams.yaml

``teams.yaml`` is a list in seed order, either plain names or ``{id, name}``
entries (optionally under a top-level ``teams`` key).

Exit codes:
    0: Success
    1: Invalid input (bad size, unreadable teams file, rejected bracket)
"""
import argparse
import sys

import yaml

from bracket.errors import BracketError
from bracket.models import Team
from bracket.seeding import generate_bracket
from bracket.topology import get_topology


def load_teams(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if isinstance(data, dict):
        data = data.get('teams')
    if not isinstance(data, list):
        raise ValueError(f"{file_path} must contain a list of teams in seed order")
    teams = []
    for entry in data:
        if isinstance(entry, dict):
            name = str(entry['name'])
            teams.append(Team(str(entry.get('id') or name), name))
        else:
            teams.append(Team(str(entry), str(entry)))
    return teams


def _route(ref):
    return f"M{ref['match_id']}{ref['slot']}" if ref else '-'


def print_topology(topology):
    print(f"--- {topology.name}: {len(topology.templates)} matches ---")
    for match in topology.describe()['matches']:
        print(f"  M{match['id']:<3} {match['section']:<8} R{match['round']}  {match['label']:<28} "
              f"win -> {_route(match['next_on_win'])}  lose -> {_route(match['next_on_loss'])}")


def print_bracket(state):
    names = {team.id: team.name for team in state.teams.values()}
    print("\n--- Seeds ---")
    for team in state.team_list():
        print(f"  {team.seed}. {team.name}")
    print("\n--- Matches ---")
    for match in state.match_list():
        if match.is_bye:
            print(f"  M{match.id:<3} {match.label}: {names[match.slot_a]} advances")
            continue
        side_a = names.get(match.slot_a, 'TBD')
        side_b = names.get(match.slot_b, 'TBD')
        print(f"  M{match.id:<3} [{match.status}] {match.label}: {side_a} vs {side_b}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Double elimination bracket engine')
    subparsers = parser.add_subparsers(dest='command', required=True)

    show = subparsers.add_parser('show', help='Print the match graph for a number of teams')
    show.add_argument('size', type=int, help='Number of teams')
    show.add_argument('--generic', action='store_true', help='Use the generic builder even for 5 to 10 teams')

    generate = subparsers.add_parser('generate', help='Generate a bracket from a seed-ordered teams file')
    generate.add_argument('teams_file', help='YAML list of teams, strongest first')

    args = parser.parse_args(argv)

    try:
        if args.command == 'show':
            print_topology(get_topology(args.size, generic=args.generic))
        else:
            teams = load_teams(args.teams_file)
            print_bracket(generate_bracket(teams))
    except (BracketError, OSError, KeyError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
