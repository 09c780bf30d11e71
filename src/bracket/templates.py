"""
Hand-authored double elimination templates for 5 to 10 teams.

Each row is ``(match, section, round, source_a, source_b, label)``:

- ``S4``  seed 4 plays in this slot
- ``W2``  winner of match 2 plays in this slot
- ``L3``  loser of match 3 plays in this slot

Routing (where a winner/loser goes next) is derived from these sources by
``Topology``, so every route names its slot explicitly.

Top seeds receive the byes by entering in winners round 2. Losers dropping
from the winners bracket are crossed over so that two teams who already met
are kept apart for as long as the bracket allows.
"""
from .models import WINNERS, LOSERS, FINAL, DECIDER

W, L, F, D = WINNERS, LOSERS, FINAL, DECIDER


# 5 teams: S1, S2 and S3 skip round 1. 8 matches + decider.
TEMPLATE_5 = [
    (1, W, 1, 'S4', 'S5', None),
    (2, W, 2, 'S1', 'W1', None),
    (3, W, 2, 'S2', 'S3', None),
    (4, W, 3, 'W2', 'W3', 'Winners Final'),
    (5, L, 1, 'L1', 'L3', None),
    (6, L, 2, 'L2', 'W5', 'Losers Semifinal'),
    (7, L, 3, 'W6', 'L4', 'Losers Final'),
    (8, F, 1, 'W4', 'W7', 'Grand Final'),
    (9, D, 1, 'L8', 'W8', 'Decider'),
]

# 6 teams: S1 and S2 skip round 1. 10 matches + decider.
TEMPLATE_6 = [
    (1, W, 1, 'S3', 'S6', None),
    (2, W, 1, 'S4', 'S5', None),
    (3, W, 2, 'S1', 'W2', None),
    (4, W, 2, 'S2', 'W1', None),
    (5, W, 3, 'W3', 'W4', 'Winners Final'),
    (6, L, 1, 'L1', 'L3', None),
    (7, L, 1, 'L2', 'L4', None),
    (8, L, 2, 'W6', 'W7', 'Losers Semifinal'),
    (9, L, 3, 'W8', 'L5', 'Losers Final'),
    (10, F, 1, 'W5', 'W9', 'Grand Final'),
    (11, D, 1, 'L10', 'W10', 'Decider'),
]

# 7 teams: S1 skips round 1. 12 matches + decider.
TEMPLATE_7 = [
    (1, W, 1, 'S4', 'S5', None),
    (2, W, 1, 'S3', 'S6', None),
    (3, W, 1, 'S2', 'S7', None),
    (4, W, 2, 'S1', 'W3', None),
    (5, W, 2, 'W2', 'W1', None),
    (6, W, 3, 'W4', 'W5', 'Winners Final'),
    (7, L, 1, 'L1', 'L2', None),
    (8, L, 2, 'L4', 'W7', None),
    (9, L, 2, 'L5', 'L3', None),
    (10, L, 3, 'W8', 'W9', 'Losers Semifinal'),
    (11, L, 4, 'W10', 'L6', 'Losers Final'),
    (12, F, 1, 'W6', 'W11', 'Grand Final'),
    (13, D, 1, 'L12', 'W12', 'Decider'),
]

# 8 teams: full bracket, no byes. 14 matches + decider.
TEMPLATE_8 = [
    (1, W, 1, 'S1', 'S8', None),
    (2, W, 1, 'S4', 'S5', None),
    (3, W, 1, 'S3', 'S6', None),
    (4, W, 1, 'S2', 'S7', None),
    (5, W, 2, 'W1', 'W2', None),
    (6, W, 2, 'W3', 'W4', None),
    (7, W, 3, 'W5', 'W6', 'Winners Final'),
    (8, L, 1, 'L1', 'L2', None),
    (9, L, 1, 'L3', 'L4', None),
    (10, L, 2, 'L5', 'W9', None),
    (11, L, 2, 'L6', 'W8', None),
    (12, L, 3, 'W10', 'W11', 'Losers Semifinal'),
    (13, L, 4, 'W12', 'L7', 'Losers Final'),
    (14, F, 1, 'W7', 'W13', 'Grand Final'),
    (15, D, 1, 'L14', 'W14', 'Decider'),
]

# 9 teams: only S8 vs S9 plays round 1. 16 matches + decider.
TEMPLATE_9 = [
    (1, W, 1, 'S8', 'S9', None),
    (2, W, 2, 'S1', 'W1', None),
    (3, W, 2, 'S4', 'S5', None),
    (4, W, 2, 'S3', 'S6', None),
    (5, W, 2, 'S2', 'S7', None),
    (6, W, 3, 'W2', 'W3', None),
    (7, W, 3, 'W4', 'W5', None),
    (8, W, 4, 'W6', 'W7', 'Winners Final'),
    (9, L, 1, 'L1', 'L5', None),
    (10, L, 1, 'L2', 'L3', None),
    (11, L, 2, 'L4', 'W9', None),
    (12, L, 3, 'L7', 'W10', None),
    (13, L, 3, 'L6', 'W11', None),
    (14, L, 4, 'W12', 'W13', 'Losers Semifinal'),
    (15, L, 5, 'W14', 'L8', 'Losers Final'),
    (16, F, 1, 'W8', 'W15', 'Grand Final'),
    (17, D, 1, 'L16', 'W16', 'Decider'),
]

# 10 teams: S7 vs S10 and S8 vs S9 play round 1. 18 matches + decider.
TEMPLATE_10 = [
    (1, W, 1, 'S7', 'S10', None),
    (2, W, 1, 'S8', 'S9', None),
    (3, W, 2, 'S1', 'W2', None),
    (4, W, 2, 'S4', 'S5', None),
    (5, W, 2, 'S3', 'S6', None),
    (6, W, 2, 'S2', 'W1', None),
    (7, W, 3, 'W3', 'W4', None),
    (8, W, 3, 'W5', 'W6', None),
    (9, W, 4, 'W7', 'W8', 'Winners Final'),
    (10, L, 1, 'L1', 'L2', None),
    (11, L, 2, 'L4', 'L5', None),
    (12, L, 2, 'L3', 'L6', None),
    (13, L, 3, 'W10', 'W11', None),
    (14, L, 4, 'W12', 'L8', None),
    (15, L, 4, 'W13', 'L7', None),
    (16, L, 5, 'W14', 'W15', 'Losers Semifinal'),
    (17, L, 6, 'W16', 'L9', 'Losers Final'),
    (18, F, 1, 'W9', 'W17', 'Grand Final'),
    (19, D, 1, 'L18', 'W18', 'Decider'),
]

TEMPLATES = {
    5: TEMPLATE_5,
    6: TEMPLATE_6,
    7: TEMPLATE_7,
    8: TEMPLATE_8,
    9: TEMPLATE_9,
    10: TEMPLATE_10,
}
