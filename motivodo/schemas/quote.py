from pydantic import BaseModel


class QuoteRead(BaseModel):
    text: str
    author: str
