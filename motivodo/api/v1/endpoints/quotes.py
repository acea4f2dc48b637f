from fastapi import APIRouter, Depends
from typing import Optional

from motivodo.schemas.quote import QuoteRead
from motivodo.services.quotes import QuoteService, get_quote_service

router = APIRouter()


# The refresh discriminator only exists so clients can refetch under a new
# cache key; it never bypasses the day cache.
@router.get("/daily", response_model=QuoteRead)
@router.get("/daily/{refresh}", response_model=QuoteRead)
def get_daily_quote(
    refresh: Optional[str] = None,
    quotes: QuoteService = Depends(get_quote_service),
):
    quote = quotes.daily_quote()
    return QuoteRead(text=quote.text, author=quote.author)
