"""Built-in agents."""

from unoflip.agents.computer_agent import ComputerAgent
from unoflip.agents.human_agent import HumanAgent

__all__ = ["ComputerAgent", "HumanAgent"]
