"""
The 52-card deck, built as a PyTable.

One row per card with ``face``, ``suit`` and ``value`` columns. Suits are
the outer loop, faces run from king down to ace within each suit.
"""

import random

from .table import PyTable


FACES = ("king", "queen", "jack", "ten", "nine", "eight", "seven",
	"six", "five", "four", "three", "two", "ace")
SUITS = ("spades", "clubs", "diamonds", "hearts")
VALUES = tuple(range(13, 0, -1))


def make_deck():
	"""Full deck, spades first."""
	return PyTable({
		'face': [face for _ in SUITS for face in FACES],
		'suit': [suit for suit in SUITS for _ in FACES],
		'value': [value for _ in SUITS for value in VALUES],
	})


def deal(deck):
	"""Top card of the deck as a row dict."""
	return deck.get_row(0)


def shuffle(deck, rng=None):
	"""New deck with the rows in random order."""
	order = list(range(deck.row_count()))
	(rng or random).shuffle(order)
	return deck.take(order)
