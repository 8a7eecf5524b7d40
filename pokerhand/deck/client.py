#!/usr/bin/env python3
"""
HTTP client for the Deck of Cards API (https://deckofcardsapi.com).

Creates, loads, reshuffles and draws from remote decks. Every call is a
GET against "<api_base><endpoint>" returning JSON; failures surface as
DeckAPIError.

Usage:
    from pokerhand.deck.client import DeckClient

    with DeckClient() as client:
        deck = client.new_deck()
        cards = client.draw(deck, 5)
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from pokerhand.config.settings import Settings
from pokerhand.models.card import Card
from pokerhand.models.deck import Deck

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://deckofcardsapi.com/api/deck/"


class DeckAPIError(RuntimeError):
    """Raised when the Deck of Cards API cannot be reached or rejects a request."""


class DeckClient:
    """Client for the Deck of Cards API."""

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            session: requests.Session to use. A new one is created if None.
        """
        self.settings = Settings()

        self.settings.create("deck.api_base", default=DEFAULT_API_BASE)
        self.settings.create("deck.request_timeout", default=10)

        self.api_base = self.settings.get("deck.api_base")
        if not self.api_base.endswith("/"):
            self.api_base += "/"
        self.timeout = float(self.settings.get("deck.request_timeout"))

        self.session = session or requests.Session()

        logger.info(f"DeckClient initialized for {self.api_base}")

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
        logger.debug("DeckClient session closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def new_deck(self, shuffle: bool = True) -> Deck:
        """
        Get a new deck of cards.

        Args:
            shuffle: Should the new deck be shuffled?

        Returns:
            The new Deck
        """
        data = self._fetch_json("new/shuffle/" if shuffle else "new/")
        deck = self._deck_from_json(data.get("deck_id"), data)

        logger.info(f"Created deck '{deck.deck_id}' ({deck.remaining} cards, shuffled={deck.shuffled})")
        return deck

    def load_deck(self, deck_id: str, shuffle: bool = True) -> Deck:
        """
        Load an existing deck by id.

        Args:
            deck_id: The deck_id to load
            shuffle: Reshuffle the deck while loading it?

        Returns:
            The loaded Deck
        """
        data = self._fetch_json(f"{deck_id}/shuffle/" if shuffle else f"{deck_id}/")
        deck = self._deck_from_json(deck_id, data)

        logger.info(f"Loaded deck '{deck.deck_id}' ({deck.remaining} cards)")
        return deck

    def reshuffle(self, deck: Deck) -> Deck:
        """
        Return all cards to the deck and shuffle it.

        Args:
            deck: Deck to reshuffle. Updated in place.

        Returns:
            The same Deck
        """
        data = self._fetch_json(f"{deck.deck_id}/shuffle/")

        deck.remaining = self._remaining(data)
        deck.shuffled = bool(data.get("shuffled"))

        logger.info(f"Reshuffled deck '{deck.deck_id}' ({deck.remaining} cards)")
        return deck

    def draw(self, deck: Deck, count: int = 1, reshuffle: bool = False) -> List[Card]:
        """
        Draw cards from the deck.

        Args:
            deck: Deck to draw from. Its remaining count is updated.
            count: Number of cards to draw
            reshuffle: Reshuffle first if fewer than count cards remain

        Returns:
            The drawn cards, possibly fewer than count at the bottom of the deck

        Raises:
            DeckAPIError: If the request fails
            ValidationError: If the API returns a malformed card
        """
        if reshuffle and deck.remaining < count:
            logger.info(f"Only {deck.remaining} cards left, reshuffling before draw")
            self.reshuffle(deck)

        data = self._fetch_json(f"{deck.deck_id}/draw/", params={"count": count})

        deck.remaining = self._remaining(data)
        logger.info(f"Cards remaining in deck: {deck.remaining}")

        return [Card.from_api(card) for card in data.get("cards", [])]

    def _deck_from_json(self, deck_id: Optional[str], data: Dict[str, Any]) -> Deck:
        try:
            return Deck(
                deck_id=deck_id,
                remaining=self._remaining(data),
                shuffled=bool(data.get("shuffled"))
            )
        except ValidationError as e:
            logger.error(f"Deck API returned an invalid deck: {e}")
            raise DeckAPIError(f"Deck API returned an invalid deck (deck_id={deck_id!r})") from e

    def _remaining(self, data: Dict[str, Any]) -> int:
        """Read the remaining card count from a response payload."""
        remaining = data.get("remaining")
        try:
            return int(remaining)
        except (TypeError, ValueError) as e:
            raise DeckAPIError(f"Deck API response has no usable 'remaining' count: {remaining!r}") from e

    def _fetch_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET an API endpoint and return the parsed JSON.

        Args:
            endpoint: Path appended to the API base (e.g. "new/shuffle/")
            params: Optional query parameters

        Raises:
            DeckAPIError: On transport errors, HTTP errors, bad JSON or success=false
        """
        url = self.api_base + endpoint
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Deck API request failed: {e}")
            raise DeckAPIError(f"Deck API request failed: {e}") from e

        if not response.ok:
            logger.error(f"Deck API error: Status {response.status_code}")
            raise DeckAPIError(f"HTTP error! Status: {response.status_code} {response.reason}")

        try:
            data = response.json()
        except ValueError as e:
            raise DeckAPIError(f"Deck API returned invalid JSON from {url}") from e

        if not isinstance(data, dict):
            raise DeckAPIError(f"Deck API returned unexpected payload from {url}")

        if data.get("success") is False:
            error = data.get("error", "request was not successful")
            logger.error(f"Deck API rejected request: {error}")
            raise DeckAPIError(f"Deck API error: {error}")

        return data
