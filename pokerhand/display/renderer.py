#!/usr/bin/env python3
"""
Terminal renderer for dealt hands.

Draws the hand as a row of card panels using rich. Cards start face down
and are revealed one after another with a short pause between flips.
"""

import logging
import time
from typing import List, Optional, Sequence

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pokerhand.config.settings import Settings
from pokerhand.models.card import Card
from pokerhand.models.hand import HandResult
from pokerhand.models.ranks import RANK_SYMBOLS, SUIT_SYMBOLS

logger = logging.getLogger(__name__)

SUIT_COLORS = {
    "HEARTS": "red1",
    "DIAMONDS": "red1",
    "CLUBS": "green1",
    "SPADES": "cyan1",
}
CARD_BACK = "░░░░░\n░░░░░\n░░░░░"


class CardView:
    """A card on the table, either face up or face down."""

    def __init__(self, card: Card, is_face_up: bool = False):
        self.card = card
        self.is_face_up = is_face_up

    def face_up(self) -> None:
        self.is_face_up = True

    def face_down(self) -> None:
        self.is_face_up = False

    def flip(self) -> None:
        self.is_face_up = not self.is_face_up

    def render(self) -> Panel:
        """Render the card as a small rich panel."""
        if not self.is_face_up:
            return Panel(Text(CARD_BACK, style="blue"), expand=False, padding=(0, 1), border_style="white")

        rank = RANK_SYMBOLS[self.card.value]
        symbol = SUIT_SYMBOLS[self.card.suit]

        # 3 lines, 5 wide: rank top-left, suit centered, rank bottom-right
        face = f"{rank:<5}\n  {symbol}  \n{rank:>5}"
        style = f"bold {SUIT_COLORS[self.card.suit]}"
        return Panel(Text(face, style=style), expand=False, padding=(0, 1), border_style="white")


class HandRenderer:
    """Renders a hand of cards and its classification to the terminal."""

    def __init__(self, console: Optional[Console] = None, reveal_delay: Optional[float] = None):
        """
        Initialize the renderer.

        Args:
            console: rich Console to draw on. Defaults to stdout.
            reveal_delay: Seconds between card flips. Defaults to display.reveal_delay.
        """
        self.settings = Settings()
        self.settings.create("display.reveal_delay", default=0.3)

        self.console = console or Console()
        if reveal_delay is None:
            reveal_delay = float(self.settings.get("display.reveal_delay"))
        self.reveal_delay = reveal_delay
        self.views: List[CardView] = []

        logger.info("HandRenderer initialized")

    def set_cards(self, cards: Sequence[Card], face_up: bool = False) -> None:
        """Place new cards on the table, face down unless face_up is set."""
        self.views = [CardView(card, is_face_up=face_up) for card in cards]

    def render_table(self) -> Table:
        """Build a single-row grid of the cards on the table."""
        grid = Table.grid(padding=(0, 1))
        grid.add_row(*[view.render() for view in self.views])
        return grid

    def draw(self) -> None:
        """Print the current table."""
        self.console.print(self.render_table())

    def reveal(self) -> None:
        """Turn the cards face up one after the other, redrawing after each flip."""
        with Live(self.render_table(), console=self.console, auto_refresh=False) as live:
            for view in self.views:
                self._pause()
                view.face_up()
                live.update(self.render_table(), refresh=True)
                logger.debug(f"Revealed {view.card.code}")
            self._pause()

    def conceal(self) -> None:
        """Turn every card face down at once."""
        for view in self.views:
            view.face_down()
        self._pause()

    def show_result(self, result: HandResult) -> None:
        """Print the hand classification below the cards."""
        contributing = " ".join(str(card) for card in result.cards)
        self.console.print(Text(result.description, style="bold yellow"), Text(f"({contributing})", style="dim"))

    def _pause(self) -> None:
        if self.reveal_delay > 0:
            time.sleep(self.reveal_delay)
