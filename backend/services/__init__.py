from .game_hub import GameHub, game_hub
from .relay import GameRelay, relay
from .store import SessionRegistry

__all__ = ["relay", "GameRelay", "SessionRegistry", "game_hub", "GameHub"]
