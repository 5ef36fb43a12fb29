"""Procedural place naming."""

from .generator import NameGenerator
from .markov import END_OF_WORD, MarkovChains

__all__ = ["END_OF_WORD", "MarkovChains", "NameGenerator"]
