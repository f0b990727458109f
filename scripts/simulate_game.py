"""Simulate a game with computer agents, printing every engine notification."""

from unoflip.agents import ComputerAgent
from unoflip.engine import GameEngine, GameEvent
from unoflip.orchestration.game_runner import GameRunner


def log_event(event: GameEvent) -> None:
    game = event.game
    top = game.top_card
    print(f"> {event.command:<12} {game.side.value:<5} top={top} turn={game.current_player.name}")


def main():
    game = GameEngine(seed=42, target_score=200)
    game.new_game(["Bot1", "Bot2", "Bot3", "Bot4"], [True] * 4)
    game.add_listener(log_event)

    agents = {p.name: ComputerAgent(p.name) for p in game.players}
    runner = GameRunner(game, agents, echo=print)
    result = runner.run()

    print(f"Game finished! Winner: {result.winner}")
    print(f"Rounds: {result.rounds}")
    print(f"Scores: {result.scores}")


if __name__ == "__main__":
    main()
