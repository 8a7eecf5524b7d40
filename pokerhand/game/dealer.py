#!/usr/bin/env python3
"""
Dealer coordinating the deck, the player's hand and the renderer.

Keeps one API deck across runs by persisting its id in settings, deals
five-card hands from it and hands each finished hand to the renderer.

Usage:
    from pokerhand.game.dealer import Dealer

    dealer = Dealer().load()
    result = dealer.play_round()
    print(result.description)
"""

import logging
from typing import Optional

from pokerhand.config.settings import Settings
from pokerhand.deck.client import DeckAPIError, DeckClient
from pokerhand.display.renderer import HandRenderer
from pokerhand.models.deck import Deck
from pokerhand.models.hand import HAND_SIZE, Hand, HandResult

logger = logging.getLogger(__name__)


class Dealer:
    """Deals hands from a persisted Deck of Cards API deck."""

    def __init__(self, client: Optional[DeckClient] = None, renderer: Optional[HandRenderer] = None):
        """
        Initialize the dealer.

        Args:
            client: DeckClient for API calls. A new one is created if None.
            renderer: HandRenderer for output. A new one is created if None.
        """
        self.settings = Settings()
        self.settings.create("deck.deck_id", default="")

        self.client = client or DeckClient()
        self.renderer = renderer or HandRenderer()

        self.deck: Optional[Deck] = None
        self.hand: Optional[Hand] = None

        logger.info("Dealer initialized")

    def load(self, new_deck: bool = False) -> "Dealer":
        """
        Load the persisted deck, or create and persist a new one.

        Args:
            new_deck: Ignore any persisted deck and start a fresh one

        Returns:
            self, for chaining
        """
        deck_id = self.settings.get("deck.deck_id")

        if deck_id and not new_deck:
            try:
                self.deck = self.client.load_deck(deck_id)
                logger.info(f"Loaded an existing deck of cards with id: '{self.deck.deck_id}'")
                return self
            except DeckAPIError as e:
                logger.warning(f"Could not load deck '{deck_id}', creating a new one: {e}")

        self.deck = self.client.new_deck()
        self.settings.update("deck.deck_id", self.deck.deck_id)
        logger.info(f"Created new deck of cards with id: '{self.deck.deck_id}'")
        return self

    def deal_hand(self) -> Hand:
        """
        Draw five cards into a new hand, sorted with the Ace high.

        Returns:
            The new Hand

        Raises:
            RuntimeError: If no deck is loaded or the deck returned too few cards
        """
        if self.deck is None:
            raise RuntimeError("No deck loaded. Call load() before dealing.")

        cards = self.client.draw(self.deck, HAND_SIZE, reshuffle=True)
        if len(cards) != HAND_SIZE:
            raise RuntimeError(f"Didn't receive {HAND_SIZE} cards from the deck.")

        hand = Hand(cards=cards)
        hand.sort()
        self.hand = hand

        logger.info(f"Five cards were drawn from the deck: {[card.code for card in hand.cards]}")
        return hand

    def play_round(self) -> HandResult:
        """
        Replace the current hand with a new one and show its ranking.

        Returns:
            HandResult of the new hand
        """
        if self.hand is not None:
            self.renderer.conceal()
            logger.debug("Cards on screen have been concealed")

        hand = self.deal_hand()

        self.renderer.set_cards(hand.cards)
        self.renderer.reveal()
        logger.debug("Cards were shown to the player")

        result = hand.evaluate()
        self.renderer.show_result(result)
        logger.info(f"Highest hand: {result.description}")
        return result
