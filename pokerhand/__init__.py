#!/usr/bin/env python3
"""
pokerhand - deal five cards from the Deck of Cards API and name the poker hand.
"""

__version__ = "0.1.0"
