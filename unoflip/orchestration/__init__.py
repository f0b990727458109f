"""Game orchestration."""

from unoflip.orchestration.game_runner import GameRunner, MatchResult, RoundResult
from unoflip.orchestration.tournament import run_tournament

__all__ = ["GameRunner", "MatchResult", "RoundResult", "run_tournament"]
