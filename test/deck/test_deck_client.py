#!/usr/bin/env python3
"""
Unit tests for DeckClient in pokerhand/deck/client.py.

The HTTP session is replaced with a mock, so no request leaves the
machine. Responses mirror the Deck of Cards API payloads.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests
from pydantic import ValidationError

from pokerhand.config.settings import Settings
from pokerhand.deck.client import DEFAULT_API_BASE, DeckAPIError, DeckClient
from pokerhand.models.card import Card
from pokerhand.models.deck import Deck

DECK_ID = "3p40paa87x90"


def api_card(code, value, suit):
    return {
        "code": code,
        "image": f"https://deckofcardsapi.com/static/img/{code}.png",
        "images": {
            "svg": f"https://deckofcardsapi.com/static/img/{code}.svg",
            "png": f"https://deckofcardsapi.com/static/img/{code}.png"
        },
        "value": value,
        "suit": suit
    }


def make_response(payload=None, status_code=200, reason="OK"):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload
    return response


class DeckClientTestCase(unittest.TestCase):
    """Base case with isolated settings and a mocked session."""

    def setUp(self):
        Settings.reset_instance()
        self._tmp = tempfile.TemporaryDirectory()
        self.settings = Settings(Path(self._tmp.name) / "settings.json")

        self.session = MagicMock()
        self.client = DeckClient(session=self.session)

    def tearDown(self):
        Settings.reset_instance()
        self._tmp.cleanup()

    def respond(self, *payloads):
        """Queue JSON responses for successive GET requests."""
        self.session.get.side_effect = [make_response(payload) for payload in payloads]

    def requested(self):
        """URLs and params of every GET made so far."""
        return [
            (call.args[0], call.kwargs.get("params"))
            for call in self.session.get.call_args_list
        ]


class TestDeckClientConfig(DeckClientTestCase):
    """Test settings wiring."""

    def test_defaults_created(self):
        """Test the client registers its settings with defaults."""
        self.assertEqual(self.settings.get("deck.api_base"), DEFAULT_API_BASE)
        self.assertEqual(self.settings.get("deck.request_timeout"), 10)
        self.assertEqual(self.client.api_base, DEFAULT_API_BASE)
        self.assertEqual(self.client.timeout, 10.0)

    def test_api_base_gets_trailing_slash(self):
        """Test a configured base without a trailing slash still joins correctly."""
        self.settings.update("deck.api_base", "http://localhost:8000/api/deck")
        client = DeckClient(session=self.session)
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": 52, "shuffled": True})

        client.new_deck()

        self.assertEqual(self.requested()[0][0], "http://localhost:8000/api/deck/new/shuffle/")

    def test_timeout_passed_to_session(self):
        """Test every request carries the configured timeout."""
        self.settings.update("deck.request_timeout", 2)
        client = DeckClient(session=self.session)
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": 52, "shuffled": True})

        client.new_deck()

        self.assertEqual(self.session.get.call_args.kwargs["timeout"], 2.0)

    def test_context_manager_closes_session(self):
        """Test leaving the with-block closes the session."""
        with DeckClient(session=self.session) as client:
            self.assertIsInstance(client, DeckClient)

        self.session.close.assert_called_once()


class TestDeckClientRequests(DeckClientTestCase):
    """Test deck creation, loading, reshuffling and drawing."""

    def test_new_deck_shuffled(self):
        """Test a new shuffled deck."""
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": 52, "shuffled": True})

        deck = self.client.new_deck()

        self.assertEqual(self.requested(), [(DEFAULT_API_BASE + "new/shuffle/", None)])
        self.assertEqual(deck, Deck(deck_id=DECK_ID, remaining=52, shuffled=True))

    def test_new_deck_unshuffled(self):
        """Test a new deck in factory order."""
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": 52, "shuffled": False})

        deck = self.client.new_deck(shuffle=False)

        self.assertEqual(self.requested()[0][0], DEFAULT_API_BASE + "new/")
        self.assertFalse(deck.shuffled)

    def test_new_deck_with_short_id(self):
        """Test a malformed deck id from the API surfaces as DeckAPIError."""
        self.respond({"success": True, "deck_id": "abc", "remaining": 52, "shuffled": True})

        with self.assertRaises(DeckAPIError) as context:
            self.client.new_deck()

        self.assertIsInstance(context.exception.__cause__, ValidationError)

    def test_load_deck_with_short_id(self):
        """Test loading a malformed stored id surfaces as DeckAPIError."""
        self.respond({"success": True, "deck_id": "short", "remaining": 52, "shuffled": True})

        with self.assertRaises(DeckAPIError):
            self.client.load_deck("short")

    def test_load_deck(self):
        """Test loading an existing deck reshuffles it by id."""
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": 52, "shuffled": True})

        deck = self.client.load_deck(DECK_ID)

        self.assertEqual(self.requested()[0][0], f"{DEFAULT_API_BASE}{DECK_ID}/shuffle/")
        self.assertEqual(deck.deck_id, DECK_ID)
        self.assertEqual(deck.remaining, 52)

    def test_load_deck_without_shuffle(self):
        """Test loading a deck as-is."""
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": 31, "shuffled": False})

        deck = self.client.load_deck(DECK_ID, shuffle=False)

        self.assertEqual(self.requested()[0][0], f"{DEFAULT_API_BASE}{DECK_ID}/")
        self.assertEqual(deck.remaining, 31)

    def test_reshuffle_updates_deck(self):
        """Test reshuffling updates the deck in place."""
        deck = Deck(deck_id=DECK_ID, remaining=2)
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": 52, "shuffled": True})

        result = self.client.reshuffle(deck)

        self.assertIs(result, deck)
        self.assertEqual(deck.remaining, 52)
        self.assertTrue(deck.shuffled)

    def test_draw(self):
        """Test drawing returns Card objects and updates the remaining count."""
        deck = Deck(deck_id=DECK_ID, remaining=52, shuffled=True)
        self.respond({
            "success": True,
            "deck_id": DECK_ID,
            "cards": [api_card("KH", "KING", "HEARTS"), api_card("8C", "8", "CLUBS")],
            "remaining": 50
        })

        cards = self.client.draw(deck, 2)

        self.assertEqual(self.requested(), [(f"{DEFAULT_API_BASE}{DECK_ID}/draw/", {"count": 2})])
        self.assertEqual([card.code for card in cards], ["KH", "8C"])
        self.assertTrue(all(isinstance(card, Card) for card in cards))
        self.assertEqual(cards[0].value, "KING")
        self.assertEqual(deck.remaining, 50)

    def test_draw_reshuffles_when_short(self):
        """Test a draw with too few cards left reshuffles first."""
        deck = Deck(deck_id=DECK_ID, remaining=2, shuffled=True)
        cards = [api_card(code, value, "SPADES") for code, value in
                 [("2S", "2"), ("3S", "3"), ("4S", "4"), ("5S", "5"), ("6S", "6")]]
        self.respond(
            {"success": True, "deck_id": DECK_ID, "remaining": 52, "shuffled": True},
            {"success": True, "deck_id": DECK_ID, "cards": cards, "remaining": 47}
        )

        drawn = self.client.draw(deck, 5, reshuffle=True)

        self.assertEqual(
            [url for url, _ in self.requested()],
            [f"{DEFAULT_API_BASE}{DECK_ID}/shuffle/", f"{DEFAULT_API_BASE}{DECK_ID}/draw/"]
        )
        self.assertEqual(len(drawn), 5)
        self.assertEqual(deck.remaining, 47)

    def test_draw_without_reshuffle_returns_short(self):
        """Test the bottom of the deck yields fewer cards than asked for."""
        deck = Deck(deck_id=DECK_ID, remaining=2, shuffled=True)
        self.respond({
            "success": True,
            "deck_id": DECK_ID,
            "cards": [api_card("AS", "ACE", "SPADES"), api_card("0D", "10", "DIAMONDS")],
            "remaining": 0
        })

        drawn = self.client.draw(deck, 5)

        self.assertEqual(len(drawn), 2)
        self.assertEqual(len(self.requested()), 1)
        self.assertEqual(deck.remaining, 0)

    def test_draw_malformed_card(self):
        """Test a card with an unknown value fails validation."""
        deck = Deck(deck_id=DECK_ID)
        self.respond({
            "success": True,
            "deck_id": DECK_ID,
            "cards": [api_card("XH", "JOKER", "HEARTS")],
            "remaining": 51
        })

        with self.assertRaises(ValidationError):
            self.client.draw(deck, 1)


class TestDeckClientErrors(DeckClientTestCase):
    """Test failure handling."""

    def test_http_error(self):
        """Test a non-2xx status raises DeckAPIError with the status line."""
        self.session.get.return_value = make_response(status_code=500, reason="Internal Server Error")

        with self.assertRaises(DeckAPIError) as context:
            self.client.new_deck()

        self.assertEqual(str(context.exception), "HTTP error! Status: 500 Internal Server Error")

    def test_transport_error_is_chained(self):
        """Test connection failures are wrapped and chained."""
        error = requests.exceptions.ConnectionError("connection refused")
        self.session.get.side_effect = error

        with self.assertRaises(DeckAPIError) as context:
            self.client.new_deck()

        self.assertIs(context.exception.__cause__, error)

    def test_timeout_error(self):
        """Test timeouts surface as DeckAPIError."""
        self.session.get.side_effect = requests.exceptions.Timeout("too slow")

        with self.assertRaises(DeckAPIError):
            self.client.load_deck(DECK_ID)

    def test_invalid_json(self):
        """Test an unparseable body raises DeckAPIError."""
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        self.session.get.return_value = response

        with self.assertRaises(DeckAPIError):
            self.client.new_deck()

    def test_non_object_payload(self):
        """Test a JSON list instead of an object raises DeckAPIError."""
        self.respond([1, 2, 3])

        with self.assertRaises(DeckAPIError):
            self.client.new_deck()

    def test_unsuccessful_response(self):
        """Test success=false raises DeckAPIError with the API's message."""
        self.respond({"success": False, "error": "Deck ID does not exist."})

        with self.assertRaises(DeckAPIError) as context:
            self.client.load_deck(DECK_ID)

        self.assertIn("Deck ID does not exist.", str(context.exception))

    def test_missing_remaining_on_draw(self):
        """Test a draw response without a remaining count raises DeckAPIError."""
        deck = Deck(deck_id=DECK_ID)
        self.respond({"success": True, "deck_id": DECK_ID, "cards": [api_card("KH", "KING", "HEARTS")]})

        with self.assertRaises(DeckAPIError):
            self.client.draw(deck, 1)

        self.assertEqual(deck.remaining, 52)

    def test_unusable_remaining_on_reshuffle(self):
        """Test a non-numeric remaining count raises DeckAPIError."""
        deck = Deck(deck_id=DECK_ID, remaining=3)
        self.respond({"success": True, "deck_id": DECK_ID, "remaining": None, "shuffled": True})

        with self.assertRaises(DeckAPIError):
            self.client.reshuffle(deck)

    def test_missing_remaining_on_new_deck(self):
        self.respond({"success": True, "deck_id": DECK_ID, "shuffled": True})

        with self.assertRaises(DeckAPIError):
            self.client.new_deck()

    def test_deck_api_error_is_runtime_error(self):
        """Test callers can catch DeckAPIError as RuntimeError."""
        self.assertTrue(issubclass(DeckAPIError, RuntimeError))


if __name__ == '__main__':
    unittest.main()
