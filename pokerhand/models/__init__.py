#!/usr/bin/env python3
"""
Models package for pokerhand data models.

Provides Pydantic models for validated cards, hands and decks, plus the
hand classification used by the dealer and renderer.
"""

from .card import Card
from .deck import Deck
from .hand import Hand, HandRanking, HandResult, HAND_SIZE
from .ranks import rank_order

__all__ = [
    'Card',
    'Deck',
    'Hand',
    'HandRanking',
    'HandResult',
    'HAND_SIZE',
    'rank_order'
]
