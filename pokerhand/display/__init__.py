#!/usr/bin/env python3
"""
Display module for terminal rendering of dealt hands.

Public API:
    - HandRenderer: Draws, reveals and conceals a hand and prints its ranking
    - CardView: A single card on the table with its face-up state
"""

from pokerhand.display.renderer import HandRenderer, CardView

__all__ = ['HandRenderer', 'CardView']
