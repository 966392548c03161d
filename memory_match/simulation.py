# memory_match/simulation.py
# Plays a memory match game to completion on an asyncio event loop.

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .commands import MatchGame
from .config import Config
from .timer import AsyncioScheduler

logger = logging.getLogger(__name__)


@dataclass
class Stats:
    total_clicks: int = 0
    ignored_clicks: int = 0
    matches: int = 0
    mismatches: int = 0
    elapsed_ms: float = 0.0
    final_board: str = ""


# ----- tiny helpers -----

async def timeout_ms(milliseconds: float) -> None:
    await asyncio.sleep(milliseconds / 1000.0)

def now_ms() -> float:
    return time.time() * 1000.0

def pick_symbols(pairs: int, alphabet: Optional[List[str]] = None) -> List[str]:
    alphabet = list(alphabet if alphabet is not None else Config.SYMBOLS)
    if pairs <= 0:
        raise ValueError("pairs must be positive")
    if pairs <= len(alphabet):
        return alphabet[:pairs]
    symbols = list(alphabet)
    taken = set(alphabet)
    i = len(alphabet)
    while len(symbols) < pairs:
        name = f"S{i}"
        if name not in taken:
            symbols.append(name)
            taken.add(name)
        i += 1
    return symbols


class Player:
    """Clicks hidden cards, remembering every face it has seen."""

    def __init__(self, rng: random.Random):
        self.rng = rng
        self.seen: Dict[int, str] = {}

    def observe(self, snap: Dict) -> None:
        for card in snap["cards"]:
            if card["state"] == "matched":
                self.seen.pop(card["id"], None)
            elif card["symbol"] is not None:
                self.seen[card["id"]] = card["symbol"]

    def choose(self, snap: Dict) -> int:
        hidden = [c["id"] for c in snap["cards"] if c["state"] == "hidden"]
        up = [c for c in snap["cards"] if c["state"] == "revealed"]

        if up:
            # second pick: the remembered partner of the face-up card, if any
            symbol = up[0]["symbol"]
            for cid in hidden:
                if self.seen.get(cid) == symbol:
                    return cid
            unknown = [cid for cid in hidden if cid not in self.seen]
            return self.rng.choice(unknown or hidden)

        # first pick: a remembered pair, otherwise something new
        by_symbol: Dict[str, List[int]] = {}
        for cid in hidden:
            if cid in self.seen:
                by_symbol.setdefault(self.seen[cid], []).append(cid)
        for ids in by_symbol.values():
            if len(ids) == 2:
                return ids[0]
        unknown = [cid for cid in hidden if cid not in self.seen]
        return self.rng.choice(unknown or hidden)


# ----- main simulation -----

async def play(
    pairs: int = 8,
    seed: Optional[int] = None,
    match_delay_ms: float = Config.MATCH_DELAY_MS,
    mismatch_delay_ms: float = Config.MISMATCH_DELAY_MS,
    think_ms: float = 1.0,
    max_clicks: int = 10_000,
) -> Stats:
    rng = random.Random(seed)
    game = MatchGame(
        symbols=pick_symbols(pairs),
        scheduler=AsyncioScheduler(),
        match_delay=match_delay_ms / 1000.0,
        mismatch_delay=mismatch_delay_ms / 1000.0,
        rng=rng,
    )
    stats = Stats()
    player = Player(rng)
    done = asyncio.Event()
    last = {"pending": 0, "pairs": 0}

    def on_change(snap: Dict) -> None:
        player.observe(snap)
        # a resolution is the only change that empties a full selection
        if last["pending"] == 2 and not snap["pending"]:
            if snap["matched_pairs"] > last["pairs"]:
                stats.matches += 1
            else:
                stats.mismatches += 1
        last["pending"] = len(snap["pending"])
        last["pairs"] = snap["matched_pairs"]

    game.subscribe(on_change)
    game.on_complete(lambda snap: done.set())

    start = now_ms()
    while not done.is_set():
        snap = game.snapshot()
        if len(snap["pending"]) == 2:
            await timeout_ms(think_ms)
            continue
        if stats.total_clicks >= max_clicks:
            raise RuntimeError(f"game not finished after {max_clicks} clicks")

        card = player.choose(snap)
        after = game.pick(card)
        stats.total_clicks += 1
        if after == snap:
            stats.ignored_clicks += 1
        await timeout_ms(think_ms)

    stats.elapsed_ms = now_ms() - start
    logger.info("finished in %d clicks, %.0fms", stats.total_clicks, stats.elapsed_ms)
    stats.final_board = game.board.to_string()
    return stats


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Play a memory match game with a simulated player")
    ap.add_argument("--pairs", type=int, default=len(Config.SYMBOLS))
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--match-delay-ms", type=float, default=Config.MATCH_DELAY_MS)
    ap.add_argument("--mismatch-delay-ms", type=float, default=Config.MISMATCH_DELAY_MS)
    ap.add_argument("--think-ms", type=float, default=1.0)
    ap.add_argument("--max-clicks", type=int, default=10_000)
    a = ap.parse_args(argv)

    logging.basicConfig(level=Config.LOG_LEVEL)

    print("MEMORY MATCH - SIMULATION")
    print(f"{a.pairs} pairs, match delay {a.match_delay_ms}ms, mismatch delay {a.mismatch_delay_ms}ms\n")

    stats = asyncio.run(play(
        pairs=a.pairs,
        seed=a.seed,
        match_delay_ms=a.match_delay_ms,
        mismatch_delay_ms=a.mismatch_delay_ms,
        think_ms=a.think_ms,
        max_clicks=a.max_clicks,
    ))

    print("SIMULATION COMPLETE")
    print(stats.final_board)
    print()
    print(f"Total clicks: {stats.total_clicks}")
    print(f"Ignored clicks: {stats.ignored_clicks}")
    print(f"Matches: {stats.matches}")
    print(f"Mismatches: {stats.mismatches}")
    print(f"Elapsed: {stats.elapsed_ms:.0f}ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
