#!/usr/bin/env python3
"""
Command line entry point for pokerhand.

Usage:
    pokerhand deal                      # draw one hand from the API deck
    pokerhand deal --rounds 3 --new-deck
    pokerhand classify AS KS QS JS 0S   # classify five cards offline
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pokerhand.config.settings import Settings
from pokerhand.deck.client import DeckAPIError, DeckClient
from pokerhand.display.renderer import HandRenderer
from pokerhand.game.dealer import Dealer
from pokerhand.models.card import Card
from pokerhand.models.hand import Hand

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)8s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokerhand",
        description="Deal five cards from the Deck of Cards API and name the poker hand"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--settings", type=Path, help="Settings JSON file (default: data/settings.json)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    deal = subparsers.add_parser("deal", help="Deal hands from the API deck")
    deal.add_argument("--rounds", type=int, default=1, help="Number of hands to deal")
    deal.add_argument("--new-deck", action="store_true", help="Start a fresh deck instead of the saved one")
    deal.add_argument("--no-animation", action="store_true", help="Reveal cards without pausing")

    classify = subparsers.add_parser("classify", help="Classify five card codes (e.g. AS 0H 7C)")
    classify.add_argument("codes", nargs=5, metavar="CODE", help="Card code: rank (2-9, 0 or 10, J, Q, K, A) + suit (S, H, D, C)")

    return parser


def run_deal(rounds: int, new_deck: bool, animate: bool) -> int:
    renderer = HandRenderer(reveal_delay=None if animate else 0)

    with DeckClient() as client:
        dealer = Dealer(client=client, renderer=renderer).load(new_deck=new_deck)
        for _ in range(rounds):
            dealer.play_round()
    return 0


def run_classify(codes: List[str]) -> int:
    hand = Hand(cards=[Card.from_code(code) for code in codes])

    renderer = HandRenderer(reveal_delay=0)
    renderer.set_cards(hand.sorted_by_rank(), face_up=True)
    renderer.draw()
    renderer.show_result(hand.evaluate())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        # First construction fixes the singleton's file
        Settings(args.settings)

        if args.command == "deal":
            return run_deal(args.rounds, args.new_deck, not args.no_animation)
        return run_classify(args.codes)
    except ValueError as e:
        print(f"Invalid card data: {e}")
        return 1
    except (DeckAPIError, RuntimeError, OSError) as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
