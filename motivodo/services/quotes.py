"""Daily motivational quote.

One quote is picked per calendar day and cached for the whole process.
Each worker process keeps its own cache, so several instances may show
different quotes on the same day until they all roll over at midnight.
"""
import logging
import random
import threading
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    text: str
    author: str


QUOTES: tuple[Quote, ...] = (
    Quote("The secret of getting ahead is getting started.", "Mark Twain"),
    Quote("It always seems impossible until it's done.", "Nelson Mandela"),
    Quote("Don't watch the clock; do what it does. Keep going.", "Sam Levenson"),
    Quote("The future depends on what you do today.", "Mahatma Gandhi"),
    Quote("Believe you can and you're halfway there.", "Theodore Roosevelt"),
    Quote(
        "Success is not final, failure is not fatal: it is the courage to continue that counts.",
        "Winston Churchill",
    ),
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("Your limitation—it's only your imagination.", "Unknown"),
    Quote("Push yourself, because no one else is going to do it for you.", "Unknown"),
    Quote("Great things never come from comfort zones.", "Unknown"),
    Quote("Dream it. Wish it. Do it.", "Unknown"),
    Quote("Success doesn't just find you. You have to go out and get it.", "Unknown"),
    Quote(
        "The harder you work for something, the greater you'll feel when you achieve it.",
        "Unknown",
    ),
    Quote("Dream bigger. Do bigger.", "Unknown"),
    Quote("Don't stop when you're tired. Stop when you're done.", "Unknown"),
    Quote("Wake up with determination. Go to bed with satisfaction.", "Unknown"),
    Quote("Do something today that your future self will thank you for.", "Sean Patrick Flanery"),
    Quote("Little things make big days.", "Unknown"),
    Quote("It's going to be hard, but hard does not mean impossible.", "Unknown"),
    Quote("Don't wait for opportunity. Create it.", "Unknown"),
)


class QuoteService:
    def __init__(
        self,
        quotes: Sequence[Quote] = QUOTES,
        today: Callable[[], date] = date.today,
        rng: Optional[random.Random] = None,
    ):
        if not quotes:
            raise ValueError("QuoteService needs at least one quote")
        self._quotes = tuple(quotes)
        self._today = today
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._cached: Optional[tuple[date, Quote]] = None

    def daily_quote(self) -> Quote:
        today = self._today()
        with self._lock:
            if self._cached is None or self._cached[0] != today:
                quote = self._rng.choice(self._quotes)
                self._cached = (today, quote)
                logger.info("Picked quote of the day for %s: %s", today, quote.author)
            return self._cached[1]


quote_service = QuoteService()


def get_quote_service() -> QuoteService:
    return quote_service
