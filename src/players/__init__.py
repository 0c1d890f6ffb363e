"""
Automated Minesweeper players.

- RandomPlayer: baseline random selection
- LogicPlayer: constraint propagation with probability-based guessing
"""
from .base_player import BasePlayer
from .random_player import RandomPlayer
from .logic_player import Constraint, LogicPlayer

PLAYERS = {
    "random": RandomPlayer,
    "logic": LogicPlayer,
}

__all__ = [
    "BasePlayer",
    "RandomPlayer",
    "LogicPlayer",
    "Constraint",
    "PLAYERS",
]
