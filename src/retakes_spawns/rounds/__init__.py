"""
Round setup: bombsite choice and spawn allocation per round.
"""

from .round_state import RoundState, RoundSetupResult, RoundOrchestrator, build_round_orchestrator

__all__ = [
    'RoundState',
    'RoundSetupResult',
    'RoundOrchestrator',
    'build_round_orchestrator',
]
