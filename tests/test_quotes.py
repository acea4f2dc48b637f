# tests/test_quotes.py

from __future__ import annotations

from datetime import date, timedelta
import random

import pytest

from motivodo.services.quotes import QUOTES, Quote, QuoteService


def test_same_quote_all_day(quote_service) -> None:
    first = quote_service.daily_quote()

    assert all(quote_service.daily_quote() == first for _ in range(20))


def test_new_day_triggers_fresh_pick(clock) -> None:
    picks = iter([Quote("A", "a"), Quote("B", "b")])

    class ScriptedRandom(random.Random):
        def choice(self, seq):
            return next(picks)

    service = QuoteService([Quote("A", "a"), Quote("B", "b")], today=clock, rng=ScriptedRandom())

    assert service.daily_quote().text == "A"
    assert service.daily_quote().text == "A"

    clock.today = clock.today + timedelta(days=1)

    assert service.daily_quote().text == "B"
    assert service.daily_quote().text == "B"


def test_pick_comes_from_the_fixed_list() -> None:
    service = QuoteService(today=lambda: date(2026, 1, 1))

    assert service.daily_quote() in QUOTES
    assert len(QUOTES) == 20


def test_empty_quote_list_is_rejected() -> None:
    with pytest.raises(ValueError):
        QuoteService([])


@pytest.mark.parametrize("path", ["/api/quotes/daily", "/api/quotes/daily/3", "/api/quotes/daily?refresh=7"])
def test_daily_quote_endpoint_ignores_refresh_discriminator(client, quote_service, path) -> None:
    expected = quote_service.daily_quote()

    response = client.get(path)

    assert response.status_code == 200
    assert response.json() == {"text": expected.text, "author": expected.author}


def test_daily_quote_needs_no_session(client) -> None:
    assert client.get("/api/quotes/daily").status_code == 200
