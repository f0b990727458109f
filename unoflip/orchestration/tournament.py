"""Tournament - run many all-computer matches and aggregate results."""

import random
from collections import defaultdict
from typing import Dict, Optional

from unoflip.agents.computer_agent import ComputerAgent
from unoflip.engine import GameEngine
from unoflip.engine.game import WINNING_SCORE
from unoflip.orchestration.game_runner import GameRunner


def run_tournament(
    num_players: int = 4,
    num_matches: int = 10,
    seed: Optional[int] = None,
    target_score: int = WINNING_SCORE,
) -> Dict[str, int]:
    """Play ``num_matches`` matches between computer players.

    Seating rotates every match so nobody always leads. Matches that stall
    without a winner count for nobody.

    Returns:
        Dict mapping player name to number of matches won.
    """
    names = [f"cpu_{i}" for i in range(num_players)]
    wins: Dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for m in range(num_matches):
        shift = m % num_players
        order = names[shift:] + names[:shift]
        game = GameEngine(seed=rng.randint(0, 2**31 - 1), target_score=target_score, history_limit=1)
        game.new_game(order, [True] * num_players)
        agents = {name: ComputerAgent(name) for name in order}
        result = GameRunner(game, agents).run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
