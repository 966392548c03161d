from .board import Board, Card, CardState
from .commands import MatchGame
from .timer import AsyncioScheduler, Scheduler, ThreadingScheduler

__all__ = [
    "Board",
    "Card",
    "CardState",
    "MatchGame",
    "Scheduler",
    "AsyncioScheduler",
    "ThreadingScheduler",
]
