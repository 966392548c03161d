# memory_match/commands.py
from __future__ import annotations
import logging
import random
from threading import RLock
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from .board import Board, CardState
from .timer import Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[Dict], None]


class MatchGame:
    """
    One memory match session: owns the current Board, gates clicks and
    applies match/mismatch outcomes after a delay.

    At most two cards are ever pending. While two are pending a resolution
    is scheduled and every click is ignored, so only one timer is outstanding.
    Scheduled resolutions remember the board generation they were made for
    and do nothing if the board has been replaced by reset() in the meantime.
    """

    def __init__(
        self,
        symbols: Optional[Iterable[str]] = None,
        scheduler: Optional[Scheduler] = None,
        match_delay: float = 0.5,
        mismatch_delay: float = 0.8,
        rng: Optional[random.Random] = None,
        board: Optional[Board] = None,
    ):
        if match_delay < 0 or mismatch_delay < 0:
            raise ValueError("delays must not be negative")
        if mismatch_delay < match_delay:
            raise ValueError("mismatch delay must be >= match delay")
        if symbols is None and board is None:
            raise ValueError("need symbols or a board")
        if symbols is not None and board is not None:
            # the alphabet of a given board is its own symbols
            raise ValueError("pass symbols or a board, not both")

        self._lock = RLock()
        self._rng = rng
        self._scheduler = scheduler or ThreadingScheduler()
        self.match_delay = match_delay
        self.mismatch_delay = mismatch_delay

        if board is None:
            board = Board.initialize(symbols, rng)
        if symbols is None:
            # keep first-seen order so reset() deals the same alphabet
            symbols = dict.fromkeys(c.symbol for c in board.cards)
        self._symbols: List[str] = list(symbols)
        self._board = board
        self._handle = None

        self._listeners: List[Listener] = []
        self._complete_listeners: List[Listener] = []

    @classmethod
    def from_config(cls, config: Mapping, scheduler: Optional[Scheduler] = None, **kwargs) -> "MatchGame":
        return cls(
            symbols=config["SYMBOLS"],
            scheduler=scheduler,
            match_delay=int(config["MATCH_DELAY_MS"]) / 1000.0,
            mismatch_delay=int(config["MISMATCH_DELAY_MS"]) / 1000.0,
            **kwargs,
        )

    @property
    def board(self) -> Board:
        return self._board

    @property
    def symbols(self) -> List[str]:
        return list(self._symbols)

    def snapshot(self) -> Dict:
        with self._lock:
            return self._board.snapshot()

    def is_complete(self) -> bool:
        with self._lock:
            return self._board.is_complete()

    def subscribe(self, listener: Listener) -> None:
        """Call listener with a fresh snapshot after every state change."""
        self._listeners.append(listener)

    def on_complete(self, listener: Listener) -> None:
        """Call listener once, with the final snapshot, when a board is solved."""
        self._complete_listeners.append(listener)

    def pick(self, card_id) -> Dict:
        """
        Handle a click on a card. Clicks that cannot be honoured (unknown id,
        card not hidden, resolution in flight) leave the game untouched.
        Returns the resulting snapshot either way.
        """
        with self._lock:
            board = self._board
            if not board.has_card(card_id):
                logger.debug("[pick-ignored] card=%r not on board", card_id)
                return board.snapshot()
            if board.card(card_id).state is not CardState.HIDDEN:
                logger.debug("[pick-ignored] card=%s is %s", card_id, board.card(card_id).state.value)
                return board.snapshot()
            if len(board.pending) >= 2:
                logger.debug("[pick-ignored] card=%s resolution in flight", card_id)
                return board.snapshot()

            board.reveal(card_id)
            logger.debug("[pick] generation=%s card=%s pending=%s", board.generation, card_id, board.pending)

            pending = board.pending
            if len(pending) == 2:
                self.resolve(pending[0], pending[1])

            snap = board.snapshot()
            self._emit(snap)
            return snap

    def resolve(self, first: int, second: int) -> None:
        """Schedule the outcome for the two pending cards."""
        with self._lock:
            board = self._board
            matched = board.card(first).symbol == board.card(second).symbol
            delay = self.match_delay if matched else self.mismatch_delay
            generation = board.generation

            def _fire() -> None:
                self._apply(generation, first, second, matched)

            self._handle = self._scheduler.call_later(delay, _fire)
            logger.debug(
                "[timer-set] generation=%s cards=%s,%s match=%s delay=%.3fs",
                generation, first, second, matched, delay,
            )

    def reset(self) -> Dict:
        """Deal a new shuffled board and invalidate any scheduled resolution."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None
            old = self._board.generation
            self._board = Board.initialize(self._symbols, self._rng)
            logger.info("[reset] generation %s -> %s", old, self._board.generation)

            snap = self._board.snapshot()
            self._emit(snap)
            return snap

    def _apply(self, generation: int, first: int, second: int, matched: bool) -> None:
        with self._lock:
            board = self._board
            if board.generation != generation:
                logger.info("[timer-abort] generation=%s is stale (current %s)", generation, board.generation)
                return
            self._handle = None

            if matched:
                board.mark_matched(first, second)
            else:
                board.hide(first, second)
            logger.debug(
                "[timer-fire] generation=%s cards=%s,%s match=%s pairs=%s/%s",
                generation, first, second, matched, board.matched_pairs, board.pairs,
            )

            snap = board.snapshot()
            self._emit(snap)
            if matched and board.is_complete():
                logger.info("[complete] generation=%s all %s pairs matched", generation, board.pairs)
                self._notify(self._complete_listeners, snap)

    def _emit(self, snap: Dict) -> None:
        self._notify(self._listeners, snap)

    def _notify(self, listeners: List[Listener], snap: Dict) -> None:
        for listener in list(listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("listener %r failed", listener)
