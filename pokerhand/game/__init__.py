#!/usr/bin/env python3
"""
Game module for dealing and showing hands.

Public API:
    - Dealer: Loads the persisted deck, deals hands and displays their ranking
"""

from pokerhand.game.dealer import Dealer

__all__ = ['Dealer']
