#!/usr/bin/env python3
"""
Deck model for a remote Deck of Cards API deck.

Tracks the API deck identifier and the server-reported card count.
The cards themselves live on the server until drawn.
"""

from pydantic import BaseModel, Field


class Deck(BaseModel):
    """A deck of cards held by the Deck of Cards API."""
    deck_id: str = Field(..., min_length=12, description="The deck_id from the Deck of Cards API")
    remaining: int = Field(52, ge=0, description="Cards remaining in the deck")
    shuffled: bool = Field(False, description="Was the deck shuffled?")

    class Config:
        validate_assignment = True
        extra = "forbid"
