#!/usr/bin/env python3
"""
Card model for representing playing cards with validation.

Represents a single card as delivered by the Deck of Cards API: a two
character code, a suit, a rank value and a face image reference. Cards are
immutable once constructed.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from pokerhand.models.ranks import (
    CODE_TO_RANK,
    CODE_TO_SUIT,
    RANK_SYMBOLS,
    RANKS_ACE_HIGH,
    SUIT_SYMBOLS,
    VALID_RANKS,
    VALID_SUITS,
)

IMAGE_BASE = "https://deckofcardsapi.com/static/img/"


class Card(BaseModel):
    """Represents a playing card with code, suit, value and image."""
    code: str = Field(..., min_length=2, max_length=2, description="Two character code (e.g. 'KH', '0S')")
    suit: str = Field(..., description="Card suit (HEARTS, DIAMONDS, CLUBS, SPADES)")
    value: str = Field(..., description="Rank label (2-10, JACK, QUEEN, KING, ACE)")
    image: str = Field(..., min_length=1, description="Card face image reference")

    @field_validator('code', 'image')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Field must not be blank')
        return v

    @field_validator('suit')
    @classmethod
    def validate_suit(cls, v):
        if v not in VALID_SUITS:
            raise ValueError(f'Invalid suit: {v}. Must be one of {list(VALID_SUITS)}')
        return v

    @field_validator('value')
    @classmethod
    def validate_value(cls, v):
        if v not in VALID_RANKS:
            raise ValueError(f'Invalid value: {v}. Must be one of {list(RANKS_ACE_HIGH)}')
        return v

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Card":
        """
        Build a card from a Deck of Cards API card object.

        Keys other than code/suit/value/image (e.g. "images") are ignored.

        Raises:
            ValidationError: If a field is missing or invalid
        """
        return cls(
            code=payload.get("code"),
            suit=payload.get("suit"),
            value=payload.get("value"),
            image=payload.get("image"),
        )

    @classmethod
    def from_code(cls, code: str, image: Optional[str] = None) -> "Card":
        """
        Build a card from a short code like 'KH', '0S' or '10S'.

        Args:
            code: Rank character(s) followed by a suit character
            image: Face image reference. Defaults to the API static image.

        Raises:
            ValueError: If the rank or suit character is unknown
        """
        code = code.strip().upper()
        if code.startswith("10"):
            code = "0" + code[2:]
        if len(code) != 2:
            raise ValueError(f"Invalid card code: {code!r}")

        rank_char, suit_char = code[0], code[1]
        if rank_char not in CODE_TO_RANK:
            raise ValueError(f"Invalid rank character in card code: {code!r}")
        if suit_char not in CODE_TO_SUIT:
            raise ValueError(f"Invalid suit character in card code: {code!r}")

        return cls(
            code=code,
            suit=CODE_TO_SUIT[suit_char],
            value=CODE_TO_RANK[rank_char],
            image=image or f"{IMAGE_BASE}{code}.png",
        )

    def __str__(self) -> str:
        """String representation (e.g., 'K♥' for King of hearts)."""
        return f"{RANK_SYMBOLS[self.value]}{SUIT_SYMBOLS[self.suit]}"

    class Config:
        frozen = True
        extra = "forbid"
