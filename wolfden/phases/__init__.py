"""
Phase resolvers for night, day and voting.
"""

from .day_phase import first_speaker, get_speaking_order, next_speaker
from .night_phase import NightResult, resolve_death_chain, resolve_night
from .voting import LynchResult, VoteOutcome, VoteResult, resolve_lynch, tally_votes

__all__ = [
    'first_speaker',
    'get_speaking_order',
    'next_speaker',
    'NightResult',
    'resolve_death_chain',
    'resolve_night',
    'LynchResult',
    'VoteOutcome',
    'VoteResult',
    'resolve_lynch',
    'tally_votes',
]
