#!/usr/bin/env python3
"""
Rank and suit vocabulary for playing cards.

Rank labels follow the Deck of Cards API ("2".."10", "JACK", "QUEEN",
"KING", "ACE"). Two total orderings exist, ace-high and ace-low, and they
are the only orderings ever used to compare ranks.
"""

from typing import List

# Lowest to highest
RANKS_ACE_HIGH = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "JACK", "QUEEN", "KING", "ACE")
RANKS_ACE_LOW = ("ACE",) + RANKS_ACE_HIGH[:-1]

VALID_RANKS = frozenset(RANKS_ACE_HIGH)
VALID_SUITS = ("HEARTS", "DIAMONDS", "CLUBS", "SPADES")

_RANK_INDEX = {
    True: {rank: index for index, rank in enumerate(RANKS_ACE_HIGH)},
    False: {rank: index for index, rank in enumerate(RANKS_ACE_LOW)},
}

# Card code characters -> labels
CODE_TO_RANK = {
    "2": "2", "3": "3", "4": "4", "5": "5", "6": "6", "7": "7", "8": "8",
    "9": "9", "0": "10", "J": "JACK", "Q": "QUEEN", "K": "KING", "A": "ACE"
}
CODE_TO_SUIT = {"H": "HEARTS", "D": "DIAMONDS", "C": "CLUBS", "S": "SPADES"}

# Display symbols
RANK_SYMBOLS = {
    "2": "2", "3": "3", "4": "4", "5": "5", "6": "6", "7": "7", "8": "8",
    "9": "9", "10": "10", "JACK": "J", "QUEEN": "Q", "KING": "K", "ACE": "A"
}
SUIT_SYMBOLS = {"HEARTS": "♥", "DIAMONDS": "♦", "CLUBS": "♣", "SPADES": "♠"}


def rank_order(ace_high: bool = True) -> List[str]:
    """
    Return the rank labels ordered from lowest to highest.

    Args:
        ace_high: Treat the ace as the highest rank (True) or the lowest (False)

    Returns:
        A new list of the 13 rank labels
    """
    return list(RANKS_ACE_HIGH if ace_high else RANKS_ACE_LOW)


def rank_index(value: str, ace_high: bool = True) -> int:
    """
    Position of a rank label within rank_order(ace_high).

    Raises:
        KeyError: If value is not a rank label
    """
    return _RANK_INDEX[bool(ace_high)][value]
