WINNERS = 'winners'
LOSERS = 'losers'
FINAL = 'final'
DECIDER = 'decider'
SECTIONS = (WINNERS, LOSERS, FINAL, DECIDER)

PENDING = 'pending'
READY = 'ready'
FINISHED = 'finished'

BRACKET_PENDING = 'bracket_pending'
IN_PROGRESS = 'in_progress'
AWAITING_DECIDER = 'awaiting_decider'
COMPLETED = 'completed'

SLOT_A = 'a'
SLOT_B = 'b'


class Team:
    def __init__(self, id, name, seed=None, placement=None, eliminated=False):
        self.id = id
        self.name = name
        self.seed = seed
        self.placement = placement  # None while still alive
        self.eliminated = eliminated

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'seed': self.seed,
            'placement': self.placement,
            'eliminated': self.eliminated,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data.get('name', data['id']),
            seed=data.get('seed'),
            placement=data.get('placement'),
            eliminated=bool(data.get('eliminated', False)),
        )

    def __repr__(self):
        return f"Team(id={self.id}, name={self.name}, seed={self.seed}, placement={self.placement})"


class SlotRef:
    """Points at one side of a match: where a winner or loser goes next."""

    def __init__(self, match_id, slot):
        self.match_id = match_id
        self.slot = slot

    def to_dict(self):
        return {'match_id': self.match_id, 'slot': self.slot}

    @classmethod
    def from_dict(cls, data):
        if data is None:
            return None
        return cls(data['match_id'], data['slot'])

    def __eq__(self, other):
        return isinstance(other, SlotRef) and (self.match_id, self.slot) == (other.match_id, other.slot)

    def __hash__(self):
        return hash((self.match_id, self.slot))

    def __repr__(self):
        return f"SlotRef(match_id={self.match_id}, slot={self.slot})"


class Match:
    def __init__(self, id, section, round, slot_a=None, slot_b=None, is_bye=False,
                 status=PENDING, winner_id=None, loser_id=None, score_a=None, score_b=None,
                 next_on_win=None, next_on_loss=None, label=''):
        self.id = id
        self.section = section
        self.round = round
        self.slot_a = slot_a
        self.slot_b = slot_b  # always None for a bye, which has no second side
        self.is_bye = is_bye
        self.status = status
        self.winner_id = winner_id
        self.loser_id = loser_id
        self.score_a = score_a
        self.score_b = score_b
        self.next_on_win = next_on_win
        self.next_on_loss = next_on_loss
        self.label = label

    def get_slot(self, slot):
        return self.slot_a if slot == SLOT_A else self.slot_b

    def set_slot(self, slot, team_id):
        if slot == SLOT_A:
            self.slot_a = team_id
        else:
            self.slot_b = team_id

    @property
    def is_filled(self):
        return self.slot_a is not None and self.slot_b is not None

    @property
    def participants(self):
        return [team_id for team_id in (self.slot_a, self.slot_b) if team_id is not None]

    def to_dict(self):
        data = {
            'id': self.id,
            'section': self.section,
            'round': self.round,
            'label': self.label,
            'is_bye': self.is_bye,
            'slot_a': self.slot_a,
            'slot_b': self.slot_b,
            'status': self.status,
            'winner_id': self.winner_id,
            'loser_id': self.loser_id,
            'score_a': self.score_a,
            'score_b': self.score_b,
            'next_on_win': self.next_on_win.to_dict() if self.next_on_win else None,
            'next_on_loss': self.next_on_loss.to_dict() if self.next_on_loss else None,
        }
        if self.is_bye:
            del data['slot_b']
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            section=data['section'],
            round=data['round'],
            slot_a=data.get('slot_a'),
            slot_b=data.get('slot_b'),
            is_bye=bool(data.get('is_bye', False)),
            status=data.get('status', PENDING),
            winner_id=data.get('winner_id'),
            loser_id=data.get('loser_id'),
            score_a=data.get('score_a'),
            score_b=data.get('score_b'),
            next_on_win=SlotRef.from_dict(data.get('next_on_win')),
            next_on_loss=SlotRef.from_dict(data.get('next_on_loss')),
            label=data.get('label', ''),
        )

    def __repr__(self):
        return (f"Match(id={self.id}, section={self.section}, round={self.round}, "
                f"slots=({self.slot_a}, {self.slot_b}), status={self.status})")


class TournamentState:
    """
    Everything the engine reads and writes for one tournament: the teams table
    and the match table. Phase and champion are derived, never stored.
    """

    def __init__(self, teams=None, matches=None):
        self.teams = {team.id: team for team in (teams or [])}
        self.matches = {match.id: match for match in sorted(matches or [], key=lambda m: m.id)}

    @property
    def total_teams(self):
        return len(self.teams)

    def match_list(self):
        return list(self.matches.values())

    def team_list(self):
        return sorted(self.teams.values(), key=lambda t: (t.seed is None, t.seed or 0, t.id))

    def find_section(self, section):
        """Return the first match in ``section`` or None."""
        for match in self.matches.values():
            if match.section == section:
                return match
        return None

    @property
    def phase(self):
        from .standings import derive_phase
        return derive_phase(self)

    @property
    def champion_id(self):
        from .standings import champion_id
        return champion_id(self)

    def to_dict(self):
        return {
            'teams': [team.to_dict() for team in self.team_list()],
            'matches': [match.to_dict() for match in self.match_list()],
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            teams=[Team.from_dict(t) for t in data.get('teams') or []],
            matches=[Match.from_dict(m) for m in data.get('matches') or []],
        )

    def __repr__(self):
        return f"TournamentState(teams={len(self.teams)}, matches={len(self.matches)}, phase={self.phase})"
