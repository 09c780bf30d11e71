"""
Validated match graphs for double elimination brackets.

A ``Topology`` is built from template rows (see ``templates.py``), derives the
winner/loser route of every match from the slot sources, and is validated
once before anything is instantiated from it. Topologies are plain values:
every call to ``get_topology`` builds a fresh one, so tournaments never share
routing state.
"""
import re
from collections import Counter
from graphlib import CycleError, TopologicalSorter
from typing import Dict, List, Optional

from .double_elimination import build_generic_rows
from .errors import ConfigurationError, TopologyInvalidError
from .models import WINNERS, FINAL, DECIDER, SECTIONS, SLOT_A, SLOT_B, SlotRef
from .templates import TEMPLATES

MIN_TEAMS = 2
MAX_TEAMS = 64

SEED = 'seed'
WINNER = 'winner'
LOSER = 'loser'

_SOURCE_PATTERN = re.compile(r'^([SWL])(\d+)$')
_SOURCE_KINDS = {'S': SEED, 'W': WINNER, 'L': LOSER}
_SECTION_ORDER = {section: index for index, section in enumerate(SECTIONS)}


class SlotSource:
    """Where the team in one slot comes from: a seed, or the winner/loser of a match."""

    def __init__(self, kind, ref, text=None):
        self.kind = kind  # None when the text could not be parsed
        self.ref = ref
        self.text = text

    @classmethod
    def parse(cls, text):
        if text is None:
            return None
        found = _SOURCE_PATTERN.match(str(text).strip())
        if not found:
            return cls(None, None, str(text))
        return cls(_SOURCE_KINDS[found.group(1)], int(found.group(2)), str(text))

    @property
    def upstream(self) -> Optional[int]:
        """Match number this source depends on, if any."""
        if self.kind in (WINNER, LOSER):
            return self.ref
        return None

    def describe(self) -> str:
        if self.kind == SEED:
            return f"Seed {self.ref}"
        elif self.kind == WINNER:
            return f"Winner M{self.ref}"
        elif self.kind == LOSER:
            return f"Loser M{self.ref}"
        return self.text or '?'

    def __str__(self):
        return self.text or self.describe()

    def __repr__(self):
        return f"SlotSource({self})"


class MatchTemplate:
    def __init__(self, number, section, round, source_a, source_b, label=None):
        self.number = number
        self.section = section
        self.round = round
        self.source_a = source_a
        self.source_b = source_b
        self.is_bye = (source_a is None) != (source_b is None)
        self.next_on_win = None
        self.next_on_loss = None
        if label:
            self.label = label
        elif self.is_bye:
            self.label = f"{(source_a or source_b).describe()} bye"
        elif source_a and source_b:
            self.label = f"{source_a.describe()} vs {source_b.describe()}"
        else:
            self.label = f"M{number}"

    @classmethod
    def from_row(cls, row):
        number, section, round_num, source_a, source_b, label = row
        return cls(number, section, round_num, SlotSource.parse(source_a), SlotSource.parse(source_b), label)

    def sources(self):
        return [(SLOT_A, self.source_a), (SLOT_B, self.source_b)]

    def seeds(self) -> List[int]:
        return [source.ref for _, source in self.sources() if source is not None and source.kind == SEED]

    def describe(self) -> dict:
        return {
            'id': self.number,
            'section': self.section,
            'round': self.round,
            'label': self.label,
            'is_bye': self.is_bye,
            'source_a': str(self.source_a) if self.source_a else None,
            'source_b': str(self.source_b) if self.source_b else None,
            'next_on_win': self.next_on_win.to_dict() if self.next_on_win else None,
            'next_on_loss': self.next_on_loss.to_dict() if self.next_on_loss else None,
        }

    def __repr__(self):
        return f"MatchTemplate(number={self.number}, section={self.section}, label={self.label})"


class Topology:
    """
    The complete match graph for one bracket size.

    Routes are derived from the slot sources: if match 7 lists ``W5`` in slot
    A, then match 5 routes its winner to (7, 'a'). The final has no routes;
    the decider's ``L<final>``/``W<final>`` sources only describe how it is
    filled when the losers bracket champion wins the final.
    """

    def __init__(self, size: int, rows, name: Optional[str] = None):
        self.size = size
        self.name = name or f"{size} teams"
        self.templates = [MatchTemplate.from_row(row) for row in rows]
        self._route_conflicts = []
        self._derive_routes()

    def _by_number(self) -> Dict[int, MatchTemplate]:
        by_number = {}
        for template in self.templates:
            by_number.setdefault(template.number, template)
        return by_number

    def _derive_routes(self):
        by_number = self._by_number()
        for template in self.templates:
            for slot, source in template.sources():
                if source is None or source.upstream is None:
                    continue
                upstream = by_number.get(source.upstream)
                if upstream is None:
                    continue
                if template.section == DECIDER and upstream.section == FINAL:
                    continue
                attr = 'next_on_win' if source.kind == WINNER else 'next_on_loss'
                existing = getattr(upstream, attr)
                if existing is not None:
                    self._route_conflicts.append(
                        f"M{template.number}: {source} is already routed to M{existing.match_id}"
                    )
                    continue
                setattr(upstream, attr, SlotRef(template.number, slot))

    def get(self, number: int) -> Optional[MatchTemplate]:
        return self._by_number().get(number)

    def find_section(self, section: str) -> List[MatchTemplate]:
        return [t for t in self.templates if t.section == section]

    def validate(self) -> 'Topology':
        """Check every structural invariant and raise with the full list of violations."""
        violations = []
        by_number = self._by_number()

        counts = Counter(t.number for t in self.templates)
        for number, count in sorted(counts.items()):
            if count > 1:
                violations.append(f"duplicate match id M{number}")

        for template in self.templates:
            if template.section not in SECTIONS:
                violations.append(f"M{template.number}: unknown section '{template.section}'")

        finals = self.find_section(FINAL)
        if len(finals) != 1:
            violations.append(f"expected exactly one final, found {len(finals)}")
        deciders = self.find_section(DECIDER)
        if len(deciders) > 1:
            violations.append(f"expected at most one decider, found {len(deciders)}")

        seed_counts = Counter(seed for t in self.templates for seed in t.seeds())
        for seed, count in sorted(seed_counts.items()):
            if seed < 1 or seed > self.size:
                violations.append(f"seed {seed} is outside 1..{self.size}")
            elif count > 1:
                violations.append(f"seed {seed} is placed {count} times")
        for seed in range(1, self.size + 1):
            if seed not in seed_counts:
                violations.append(f"seed {seed} is never placed")

        for template in self.templates:
            label = f"M{template.number}"
            if template.source_a is None and template.source_b is None:
                violations.append(f"{label}: has no participants")
            if template.is_bye:
                if template.section != WINNERS or template.source_a is None or template.source_a.kind != SEED:
                    violations.append(f"{label}: a bye must hold a seed in slot A of a winners match")
            for _, source in template.sources():
                if source is None:
                    continue
                if source.kind is None:
                    violations.append(f"{label}: unrecognized source '{source.text}'")
                    continue
                if source.upstream is None:
                    continue
                if source.upstream == template.number:
                    violations.append(f"{label}: references itself")
                    continue
                upstream = by_number.get(source.upstream)
                if upstream is None:
                    violations.append(f"{label}: references unknown match M{source.upstream}")
                elif upstream.is_bye and source.kind == LOSER:
                    violations.append(f"{label}: bye M{upstream.number} has no loser")
            if template.section not in (FINAL, DECIDER) and template.next_on_win is None:
                violations.append(f"{label}: winner is not routed anywhere")

        violations.extend(self._route_conflicts)

        if len(finals) == 1:
            final = finals[0]
            # Slot A of the final is the winners bracket representative
            source = final.source_a
            upstream = by_number.get(source.upstream) if source is not None and source.upstream else None
            if source is None or source.kind != WINNER or upstream is None or upstream.section != WINNERS:
                violations.append(f"M{final.number}: slot A of the final must be the winner of a winners bracket match")
            for template in deciders:
                kinds = sorted(
                    source.kind for _, source in template.sources()
                    if source is not None and source.upstream == final.number
                )
                if kinds != [LOSER, WINNER]:
                    violations.append(f"M{template.number}: decider must be fed by the winner and loser of M{final.number}")

        graph = {
            t.number: {s.upstream for _, s in t.sources() if s is not None and s.upstream is not None}
            for t in self.templates
        }
        try:
            tuple(TopologicalSorter(graph).static_order())
        except CycleError as e:
            cycle = ' -> '.join(f"M{number}" for number in e.args[1])
            violations.append(f"cycle between matches: {cycle}")

        if violations:
            raise TopologyInvalidError(violations)
        return self

    def play_order(self) -> List[int]:
        """Match ids in suggested play order: winners, losers, final, decider."""
        ordered = sorted(self.templates, key=lambda t: (_SECTION_ORDER.get(t.section, len(SECTIONS)), t.round, t.number))
        return [t.number for t in ordered]

    def describe(self) -> dict:
        return {
            'size': self.size,
            'name': self.name,
            'total_matches': len(self.templates),
            'byes': sum(1 for t in self.templates if t.is_bye),
            'play_order': self.play_order(),
            'matches': [t.describe() for t in self.templates],
        }

    def __repr__(self):
        return f"Topology(size={self.size}, matches={len(self.templates)})"


def supported_sizes() -> range:
    return range(MIN_TEAMS, MAX_TEAMS + 1)


def build_generic_topology(size: int) -> Topology:
    return Topology(size, build_generic_rows(size), name=f"{size} teams (generic)")


def get_topology(size, generic: bool = False) -> Topology:
    """
    Return a validated topology for ``size`` teams.

    Sizes with a hand-authored template use it unless ``generic`` is set;
    every other size in MIN_TEAMS..MAX_TEAMS uses the generic builder.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size not in supported_sizes():
        raise ConfigurationError(
            f"Unsupported number of teams: {size!r} (supported: {MIN_TEAMS} to {MAX_TEAMS})"
        )
    if size in TEMPLATES and not generic:
        topology = Topology(size, TEMPLATES[size])
    else:
        topology = build_generic_topology(size)
    return topology.validate()
