"""Human agent - reads actions from terminal."""

from typing import Callable, Optional

from unoflip.agent.protocol import Action, DrawCard, PlayCard, Quit, Redo, SaveGame, Undo
from unoflip.engine import Color, DarkColor, GameEngine, Player, Side, is_wild

HELP = "number = play card, d = draw, u = undo, r = redo, s [path] = save, q = quit"


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(
        self,
        name: str = "human",
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._name = name
        self._input = input_fn
        self._output = output_fn

    @property
    def name(self) -> str:
        return self._name

    def notify(self, message: str) -> None:
        self._output(message)

    def get_action(self, game: GameEngine, player: Player) -> Action:
        self._output(f"\n--- {player.name}'s turn ({game.side.value} side) ---")
        self._output(f"Top card: {game.top_card}")
        if game.wild_stack_active:
            self._output(f"Wild stack! Draw until you get {game.wild_stack_color.value}.")
        for i, card in enumerate(player.hand):
            marker = "*" if game.is_playable(card) else " "
            self._output(f" {marker}{i}: {card}")
        self._output(HELP)

        while True:
            try:
                raw = self._input("> ").strip().lower()
            except EOFError:
                return Quit()
            action = self._parse(raw, game, player)
            if action is not None:
                return action
            self._output("Invalid. Try again.")

    def _parse(self, raw: str, game: GameEngine, player: Player) -> Optional[Action]:
        if raw == "d":
            return DrawCard()
        if raw == "u":
            return Undo()
        if raw == "r":
            return Redo()
        if raw == "q":
            return Quit()
        if raw == "s" or raw.startswith("s "):
            path = raw[2:].strip() or None
            return SaveGame(path=path)
        if raw.isdigit() and int(raw) < len(player.hand):
            card = player.hand[int(raw)]
            color = None
            if is_wild(card, game.side):
                color = self._ask_color(game.side)
                if color is None:
                    return None
            return PlayCard(card=card, chosen_color=color)
        return None

    def _ask_color(self, side: Side):
        choices = list(Color) if side is Side.LIGHT else list(DarkColor)
        names = ", ".join(c.value for c in choices)
        try:
            raw = self._input(f"Choose a color ({names}): ").strip().lower()
        except EOFError:
            return None
        for color in choices:
            if color.value == raw:
                return color
        return None
