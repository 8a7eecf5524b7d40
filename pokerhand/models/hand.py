#!/usr/bin/env python3
"""
Hand model and poker hand classification.

A Hand holds exactly five cards and answers hand-shape questions about
them (flush, straight, of-a-kind groupings). The classifier tests the
categories from the rarest to the weakest and reports the first match,
since several shapes overlap (a royal flush is also a flush and a
straight, a full house also contains a pair).

Usage:
    from pokerhand.models.hand import Hand

    hand = Hand(cards=cards)
    print(hand.highest_hand())   # e.g. "Full House"
    result = hand.evaluate()     # ranking plus the cards that make it
"""

from collections import Counter
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from pokerhand.models.card import Card
from pokerhand.models.ranks import rank_index, rank_order

HAND_SIZE = 5


class HandRanking(str, Enum):
    """Poker hand categories, highest first."""
    ROYAL_FLUSH = "Royal Flush"
    STRAIGHT_FLUSH = "Straight Flush"
    FOUR_OF_A_KIND = "Four of a Kind"
    FULL_HOUSE = "Full House"
    FLUSH = "Flush"
    STRAIGHT = "Straight"
    THREE_OF_A_KIND = "Three of a Kind"
    TWO_PAIR = "Two Pair"
    ONE_PAIR = "One Pair"
    HIGH_CARD = "High Card"

    def __str__(self) -> str:
        return self.value


# Categories that use the whole hand, and the group size for the rest
_WHOLE_HAND = (
    HandRanking.ROYAL_FLUSH,
    HandRanking.STRAIGHT_FLUSH,
    HandRanking.FULL_HOUSE,
    HandRanking.FLUSH,
    HandRanking.STRAIGHT,
)
_STRAIGHTS = (HandRanking.ROYAL_FLUSH, HandRanking.STRAIGHT_FLUSH, HandRanking.STRAIGHT)
_GROUP_SIZES = {
    HandRanking.FOUR_OF_A_KIND: 4,
    HandRanking.THREE_OF_A_KIND: 3,
    HandRanking.TWO_PAIR: 2,
    HandRanking.ONE_PAIR: 2,
}


class HandResult(BaseModel):
    """Classification of a hand with the cards that form it."""
    ranking: HandRanking = Field(..., description="Highest hand category held")
    cards: Tuple[Card, ...] = Field(..., min_length=1, max_length=HAND_SIZE,
                                    description="Contributing cards, lowest first")

    @property
    def description(self) -> str:
        """Ranking label, or '<Value> High' for a high card hand."""
        if self.ranking is HandRanking.HIGH_CARD:
            return f"{self.cards[0].value.title()} High"
        return self.ranking.value

    class Config:
        frozen = True
        extra = "forbid"


class Hand(BaseModel):
    """Exactly five cards held by the player."""
    cards: Tuple[Card, ...] = Field(..., description="The five cards under evaluation")

    @field_validator('cards')
    @classmethod
    def validate_hand_size(cls, v):
        if len(v) != HAND_SIZE:
            raise ValueError(f'A hand must contain exactly {HAND_SIZE} cards, got {len(v)}')
        return v

    def __setattr__(self, name, value):
        if name == 'cards':
            # Reordering only; the cards themselves are fixed at construction
            cards = type(self)(cards=value).cards
            if Counter(cards) != Counter(self.cards):
                raise ValueError('A hand can only be reordered, not given different cards')
            value = cards
        super().__setattr__(name, value)

    def count_by_rank(self) -> Dict[str, int]:
        """
        Count the cards sharing each rank.

        Returns:
            {"rank": count, ...}
        """
        return dict(Counter(card.value for card in self.cards))

    def sorted_by_rank(self, ace_high: bool = True) -> List[Card]:
        """
        Return a copy of the cards sorted from lowest to highest rank.

        Cards of equal rank keep their relative order.

        Args:
            ace_high: Should the Ace be considered high (True) or low (False)?
        """
        return sorted(self.cards, key=lambda card: rank_index(card.value, ace_high))

    def sort(self, ace_high: bool = True) -> Tuple[Card, ...]:
        """
        Sort the hand's own cards by rank and return them.

        Args:
            ace_high: Should the Ace be considered high (True) or low (False)?

        Returns:
            The reordered cards as a tuple
        """
        self.cards = tuple(self.sorted_by_rank(ace_high))
        return self.cards

    def is_flush(self) -> bool:
        """All five cards share the same suit."""
        test_suit = self.cards[0].suit
        return all(card.suit == test_suit for card in self.cards)

    def is_straight(self) -> bool:
        """Five consecutive ranks, with the Ace either high or low."""
        return self._straight_ordering() is not None

    def is_royal_flush(self) -> bool:
        """A flush holding 10, Jack, Queen, King and Ace."""
        if not self.is_flush():
            return False
        royal_flush = rank_order(ace_high=True)[-HAND_SIZE:]
        values = {card.value for card in self.cards}
        return all(value in values for value in royal_flush)

    def is_straight_flush(self) -> bool:
        """Five consecutive cards of the same suit."""
        return self.is_flush() and self.is_straight()

    def is_of_a_kind(self, count: int = 2) -> bool:
        """
        Check whether some rank appears exactly count times.

        Args:
            count: The number of cards that must share a rank
        """
        return any(rank_count == count for rank_count in self.count_by_rank().values())

    def is_full_house(self) -> bool:
        """Three cards of one rank and two cards of another."""
        return self.is_of_a_kind(3) and self.is_of_a_kind(2)

    def is_two_pair(self) -> bool:
        """Two different ranks each held exactly twice."""
        return list(self.count_by_rank().values()).count(2) == 2

    def is_one_pair(self) -> bool:
        """Two cards of the same rank."""
        return self.is_of_a_kind(2)

    def highest_hand(self) -> HandRanking:
        """
        Determine the highest poker hand held.

        Returns:
            The first matching category, testing from highest to lowest
        """
        checks = (
            (HandRanking.ROYAL_FLUSH, self.is_royal_flush),
            (HandRanking.STRAIGHT_FLUSH, self.is_straight_flush),
            (HandRanking.FOUR_OF_A_KIND, lambda: self.is_of_a_kind(4)),
            (HandRanking.FULL_HOUSE, self.is_full_house),
            (HandRanking.FLUSH, self.is_flush),
            (HandRanking.STRAIGHT, self.is_straight),
            (HandRanking.THREE_OF_A_KIND, lambda: self.is_of_a_kind(3)),
            (HandRanking.TWO_PAIR, self.is_two_pair),
            (HandRanking.ONE_PAIR, self.is_one_pair),
        )
        for ranking, check in checks:
            if check():
                return ranking
        return HandRanking.HIGH_CARD

    def high_card(self) -> Card:
        """Highest card with the Ace high. Ties go to the earlier card."""
        return max(self.cards, key=lambda card: rank_index(card.value))

    def evaluate(self) -> HandResult:
        """
        Classify the hand and collect the cards forming the category.

        Returns:
            HandResult with the ranking and its contributing cards
        """
        ranking = self.highest_hand()

        if ranking in _WHOLE_HAND:
            ace_high = self._straight_ordering() if ranking in _STRAIGHTS else True
            cards = self.sorted_by_rank(ace_high)
        elif ranking is HandRanking.HIGH_CARD:
            cards = [self.high_card()]
        else:
            group_size = _GROUP_SIZES[ranking]
            counts = self.count_by_rank()
            cards = [card for card in self.sorted_by_rank() if counts[card.value] == group_size]

        return HandResult(ranking=ranking, cards=tuple(cards))

    def _straight_ordering(self) -> Optional[bool]:
        """Ace interpretation (True = high) under which the hand is a straight, else None."""
        for ace_high in (True, False):
            indices = [rank_index(card.value, ace_high) for card in self.sorted_by_rank(ace_high)]
            offset = indices[0]
            if indices == list(range(offset, offset + HAND_SIZE)):
                return ace_high
        return None

    def __str__(self) -> str:
        return " ".join(str(card) for card in self.cards)

    class Config:
        validate_assignment = True
        extra = "forbid"
