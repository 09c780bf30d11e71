"""
Generic double elimination bracket generation.

In double elimination:
- Teams must lose twice to be eliminated
- Winners Bracket: Teams that haven't lost yet
- Losers Bracket: Teams that have lost once
- Grand Final: Winners bracket champion vs Losers bracket champion
- Decider: If losers bracket champion wins the Grand Final, one more match decides the champion

The hand-authored templates only cover 5 to 10 teams. For any other size this
module builds rows in the same ``(match, section, round, source_a, source_b,
label)`` format by padding the field to the next power of two. Top seeds get
the byes; a losers bracket match that would only ever receive one team is
dropped and that team moves straight on.
"""
import math
from typing import List, Optional, Tuple

from .models import WINNERS, LOSERS, FINAL, DECIDER


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    return calculate_bracket_size(num_teams) - num_teams


def calculate_losers_bracket_rounds(bracket_size: int) -> int:
    """
    Calculate number of rounds in losers bracket.
    For N teams in winners bracket (power of 2):
    - Winners bracket has log2(N) rounds
    - Losers bracket has 2 * (log2(N) - 1) rounds

    Pattern: minor, major, minor, major, ... ending with a major round
    """
    if bracket_size < 2:
        return 0
    winners_rounds = int(math.log2(bracket_size))
    return 2 * (winners_rounds - 1)


def generate_bracket_order(bracket_size: int) -> List[int]:
    """
    Generate the standard tournament bracket order.
    This ensures that if all higher seeds win, they meet in the proper rounds.

    For 8 teams: [1, 8, 4, 5, 2, 7, 3, 6]
    This gives matchups: 1v8, 4v5, 2v7, 3v6
    """
    if bracket_size <= 2:
        return [1, 2]

    upper_half = generate_bracket_order(bracket_size // 2)
    result = []
    for seed in upper_half:
        result.extend([seed, bracket_size + 1 - seed])
    return result


def get_winners_round_name(teams_in_round: int) -> str:
    """Get the name for a winners bracket round."""
    if teams_in_round == 2:
        return "Winners Final"
    elif teams_in_round == 4:
        return "Winners Semifinal"
    elif teams_in_round == 8:
        return "Winners Quarterfinal"
    else:
        return f"Winners Round of {teams_in_round}"


def get_losers_round_name(round_num: int, total_losers_rounds: int) -> str:
    """Get the name for a losers bracket round (0-indexed)."""
    rounds_from_end = total_losers_rounds - round_num - 1
    if rounds_from_end == 0:
        return "Losers Final"
    elif rounds_from_end == 1:
        return "Losers Semifinal"
    else:
        return f"Losers Round {round_num + 1}"


class _RowBuilder:
    """Numbers matches in the order they are added."""

    def __init__(self):
        self.rows = []

    def add(self, section, round_num, source_a, source_b, label=None) -> int:
        number = len(self.rows) + 1
        self.rows.append((number, section, round_num, source_a, source_b, label))
        return number

    def play(self, section, round_num, source_a: Optional[str], source_b: Optional[str],
             label=None) -> Tuple[Optional[str], Optional[str]]:
        """
        Add a match between two feeds and return its (winner, loser) sources.
        With one feed missing no match is played and the other team passes through.
        """
        if source_a is None or source_b is None:
            return source_a or source_b, None
        number = self.add(section, round_num, source_a, source_b, label)
        return f'W{number}', f'L{number}'


def build_generic_rows(num_teams: int) -> List[tuple]:
    """
    Build template rows for a double elimination bracket of any size >= 2.

    Winners bracket rounds are generated first, then the losers bracket, so
    match numbers always increase along the way a team travels.
    """
    bracket_size = calculate_bracket_size(num_teams)
    total_winners_rounds = int(math.log2(bracket_size))
    total_losers_rounds = calculate_losers_bracket_rounds(bracket_size)
    builder = _RowBuilder()

    # Winners bracket, round 1: seeded, with byes for the top seeds
    winners = []
    first_round_losers = []
    bracket_order = generate_bracket_order(bracket_size)
    byes = calculate_byes(num_teams)
    first_label = get_winners_round_name(bracket_size)
    for i in range(0, len(bracket_order), 2):
        seed1, seed2 = bracket_order[i], bracket_order[i + 1]
        if seed1 <= byes:
            number = builder.add(WINNERS, 1, f'S{seed1}', None, f'Seed {seed1} bye')
            winners.append(f'W{number}')
            first_round_losers.append(None)
        else:
            winner, loser = builder.play(WINNERS, 1, f'S{seed1}', f'S{seed2}', first_label)
            winners.append(winner)
            first_round_losers.append(loser)
    losers_by_round = [first_round_losers]

    # Winners bracket, later rounds
    for round_num in range(2, total_winners_rounds + 1):
        teams_in_round = bracket_size // 2 ** (round_num - 1)
        label = get_winners_round_name(teams_in_round)
        next_winners = []
        round_losers = []
        for i in range(0, len(winners), 2):
            winner, loser = builder.play(WINNERS, round_num, winners[i], winners[i + 1], label)
            next_winners.append(winner)
            round_losers.append(loser)
        winners = next_winners
        losers_by_round.append(round_losers)

    # Losers bracket:
    # - Minor rounds (even indices): only losers bracket teams compete
    # - Major rounds (odd indices): losers from the next winners round drop in
    survivors = []
    drop_round = 1
    major_rounds_played = 0
    for round_idx in range(total_losers_rounds):
        label = get_losers_round_name(round_idx, total_losers_rounds)
        if label.startswith('Losers Round'):
            label = None
        if round_idx == 0:
            feeds = losers_by_round[0]
            pairs = [(feeds[i], feeds[i + 1]) for i in range(0, len(feeds), 2)]
        elif round_idx % 2 == 1:
            dropped = list(losers_by_round[drop_round])
            drop_round += 1
            # Cross over every other drop-down round so that teams from the
            # same half of the winners bracket do not meet again straight away
            if major_rounds_played % 2 == 0:
                dropped.reverse()
            major_rounds_played += 1
            pairs = list(zip(dropped, survivors))
        else:
            pairs = [(survivors[i], survivors[i + 1]) for i in range(0, len(survivors), 2)]
        survivors = [builder.play(LOSERS, round_idx + 1, a, b, label)[0] for a, b in pairs]

    if total_losers_rounds:
        losers_champion = survivors[0]
    else:
        losers_champion = losers_by_round[-1][0]

    final = builder.add(FINAL, 1, winners[0], losers_champion, 'Grand Final')
    builder.add(DECIDER, 1, f'L{final}', f'W{final}', 'Decider')
    return builder.rows
