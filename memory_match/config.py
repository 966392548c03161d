import os

DEFAULT_SYMBOLS = "🔥,⚡,🌙,❄,💎,🚀,🎸,👾"


def _symbols(raw):
    return [s.strip() for s in raw.split(",") if s.strip()]


class Config:
    # Resolution delays (ms). Mismatch must stay >= match so both faces are seen.
    MATCH_DELAY_MS = int(os.environ.get('MATCH_DELAY_MS', '500'))
    MISMATCH_DELAY_MS = int(os.environ.get('MISMATCH_DELAY_MS', '800'))
    # Deck alphabet; every symbol is dealt twice
    SYMBOLS = _symbols(os.environ.get('MEMORY_SYMBOLS', DEFAULT_SYMBOLS))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    TESTING = False


class TestingConfig(Config):
    TESTING = True
    MATCH_DELAY_MS = 0
    MISMATCH_DELAY_MS = 0
