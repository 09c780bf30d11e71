"""
Turn a validated topology and an ordered seed list into a live bracket.
"""
import logging
from typing import List, Optional

from .errors import ConfigurationError, SeedCountMismatchError
from .models import READY, FINISHED, Match, SlotRef, Team, TournamentState
from .topology import SEED, Topology, get_topology

logger = logging.getLogger(__name__)


def _copy_ref(ref: Optional[SlotRef]) -> Optional[SlotRef]:
    return SlotRef(ref.match_id, ref.slot) if ref else None


def _build_match(template, teams_by_seed) -> Match:
    match = Match(
        id=template.number,
        section=template.section,
        round=template.round,
        is_bye=template.is_bye,
        next_on_win=_copy_ref(template.next_on_win),
        next_on_loss=_copy_ref(template.next_on_loss),
        label=template.label,
    )
    for slot, source in template.sources():
        if source is not None and source.kind == SEED:
            match.set_slot(slot, teams_by_seed[source.ref].id)
    return match


def _resolve_byes(state: TournamentState):
    """Finish every bye and move its occupant on to the next match."""
    for match in state.match_list():
        if not match.is_bye:
            continue
        occupant = match.slot_a
        match.winner_id = occupant
        match.loser_id = None
        match.status = FINISHED
        target = match.next_on_win
        state.matches[target.match_id].set_slot(target.slot, occupant)
        logger.debug(f"Bye M{match.id}: {occupant} advances to M{target.match_id}{target.slot}")


def generate_bracket(teams: List[Team], size: Optional[int] = None,
                     topology: Optional[Topology] = None) -> TournamentState:
    """
    Instantiate every match of the bracket for ``teams`` in seed order.

    The team at index 0 is seed 1. Each team is copied with its seed set and
    its standing cleared; the caller's objects are left alone.
    """
    if size is None:
        size = topology.size if topology else len(teams)
    if topology is None:
        topology = get_topology(size)
    elif topology.size != size:
        raise ConfigurationError(f"Topology is for {topology.size} teams, not {size}")

    if len(teams) != topology.size:
        raise SeedCountMismatchError(topology.size, len(teams))

    seen = set()
    for team in teams:
        if team.id in seen:
            raise ConfigurationError(f"Duplicate team id: {team.id}")
        seen.add(team.id)

    seeded = [Team(team.id, team.name, seed=index + 1) for index, team in enumerate(teams)]
    teams_by_seed = {team.seed: team for team in seeded}

    state = TournamentState(
        teams=seeded,
        matches=[_build_match(template, teams_by_seed) for template in topology.templates],
    )
    _resolve_byes(state)

    for match in state.match_list():
        if match.status != FINISHED and match.is_filled:
            match.status = READY

    logger.debug(f"Generated {topology.name} bracket with {len(state.matches)} matches")
    return state
