# memory_match/board.py
from __future__ import annotations
import itertools
import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

HIDDEN_MARKER = "?"

_generations = itertools.count(1)


class CardState(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


@dataclass(frozen=True)
class Card:
    id: int
    symbol: str
    state: CardState = CardState.HIDDEN

    def with_state(self, state: CardState) -> "Card":
        return Card(id=self.id, symbol=self.symbol, state=state)

    def to_dict(self) -> Dict:
        # hidden cards never expose their symbol
        visible = self.state is not CardState.HIDDEN
        return {"id": self.id, "symbol": self.symbol if visible else None, "state": self.state.value}


class Board:
    """
    Mutable Board ADT for one game of memory match.

    Rep:
      - cards is the deck in display order, cards[i].id == i
      - every symbol appears on exactly two cards
      - pending holds at most two ids, in reveal order
      - an id is in pending iff that card is REVEALED
      - matched_pairs == number of MATCHED cards / 2
    Safety:
      - not synchronised; MatchGame owns the board and serialises access
    """

    def __init__(self, values: Sequence[str]):
        values = list(values)
        if not values:
            raise ValueError("a board needs at least one pair")
        counts = Counter(values)
        odd = sorted(v for v, n in counts.items() if n != 2)
        if odd:
            raise ValueError(f"each symbol must appear exactly twice: {odd}")

        self._cards: List[Card] = [Card(id=i, symbol=v) for i, v in enumerate(values)]
        self._pending: List[int] = []
        self._matched_pairs = 0
        self._pairs = len(counts)
        self._generation = next(_generations)

        self._check_rep()

    @classmethod
    def initialize(cls, symbols: Iterable[str], rng: Optional[random.Random] = None) -> "Board":
        """Build a freshly shuffled deck holding two cards per symbol."""
        symbols = list(symbols)
        if not symbols:
            raise ValueError("symbols must not be empty")
        if len(set(symbols)) != len(symbols):
            raise ValueError("symbols must be distinct")

        deck = symbols + symbols
        # Random() seeds itself from os.urandom unless the caller pins the layout
        (rng or random.Random()).shuffle(deck)
        return cls(deck)

    def _check_rep(self) -> None:
        assert len(self._cards) == 2 * self._pairs
        assert len(self._pending) <= 2
        assert len(set(self._pending)) == len(self._pending)
        matched = 0
        for i, card in enumerate(self._cards):
            assert card.id == i
            if card.state is CardState.REVEALED:
                assert i in self._pending
            else:
                assert i not in self._pending
            if card.state is CardState.MATCHED:
                matched += 1
        assert matched == 2 * self._matched_pairs
        assert 0 <= self._matched_pairs <= self._pairs

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pairs(self) -> int:
        return self._pairs

    @property
    def matched_pairs(self) -> int:
        return self._matched_pairs

    @property
    def pending(self) -> List[int]:
        return list(self._pending)

    @property
    def cards(self) -> List[Card]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def has_card(self, card_id) -> bool:
        return isinstance(card_id, int) and not isinstance(card_id, bool) and 0 <= card_id < len(self._cards)

    def card(self, card_id: int) -> Card:
        self._validate_id(card_id)
        return self._cards[card_id]

    def is_complete(self) -> bool:
        return self._matched_pairs == self._pairs

    def reveal(self, card_id: int) -> Card:
        """Turn a hidden card face up and queue it for resolution."""
        self._validate_id(card_id)
        card = self._cards[card_id]
        if card.state is not CardState.HIDDEN:
            raise ValueError(f"card {card_id} is not hidden")
        if len(self._pending) >= 2:
            raise ValueError("two cards already pending")

        self._cards[card_id] = card.with_state(CardState.REVEALED)
        self._pending.append(card_id)
        self._check_rep()
        return self._cards[card_id]

    def mark_matched(self, first: int, second: int) -> None:
        """Mark two revealed cards as a permanently matched pair."""
        c1, c2 = self._pending_pair(first, second)
        if c1.symbol != c2.symbol:
            raise ValueError("values do not match")

        self._cards[first] = c1.with_state(CardState.MATCHED)
        self._cards[second] = c2.with_state(CardState.MATCHED)
        self._matched_pairs += 1
        self._pending = []
        self._check_rep()

    def hide(self, first: int, second: int) -> None:
        """Turn two revealed, mismatched cards face down again."""
        c1, c2 = self._pending_pair(first, second)

        self._cards[first] = c1.with_state(CardState.HIDDEN)
        self._cards[second] = c2.with_state(CardState.HIDDEN)
        self._pending = []
        self._check_rep()

    def snapshot(self) -> Dict:
        return {
            "generation": self._generation,
            "cards": [c.to_dict() for c in self._cards],
            "matched_pairs": self._matched_pairs,
            "pairs": self._pairs,
            "pending": list(self._pending),
            "is_complete": self.is_complete(),
        }

    def to_string(self, columns: int = 4) -> str:
        if columns <= 0:
            raise ValueError("columns must be positive")
        faces = [HIDDEN_MARKER if c.state is CardState.HIDDEN else c.symbol for c in self._cards]
        rows = [faces[i:i + columns] for i in range(0, len(faces), columns)]
        return "\n".join(" ".join(row) for row in rows)

    def __str__(self) -> str:
        return self.to_string()

    def _pending_pair(self, first: int, second: int):
        self._validate_id(first)
        self._validate_id(second)
        if first == second:
            raise ValueError("a pair needs two different cards")
        if sorted(self._pending) != sorted([first, second]):
            raise ValueError("both cards must be pending")
        return self._cards[first], self._cards[second]

    def _validate_id(self, card_id: int) -> None:
        if not self.has_card(card_id):
            raise ValueError("invalid card id")
