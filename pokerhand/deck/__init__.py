#!/usr/bin/env python3
"""
Deck module for the remote Deck of Cards API.

Public API:
    - DeckClient: Create, load, reshuffle and draw from API decks
    - DeckAPIError: Raised on failed API requests
"""

from pokerhand.deck.client import DeckClient, DeckAPIError

__all__ = ['DeckClient', 'DeckAPIError']
