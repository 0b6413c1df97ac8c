"""
Hearts: decision engine for an autonomous Hearts participant.

Subpackages:
    hearts.game: card, trick and snapshot model, wire codec, simulator
    hearts.strategy: card passing and card play strategies
    hearts.evaluation: strategy-versus-strategy arena
"""

__version__ = "0.3.0"
