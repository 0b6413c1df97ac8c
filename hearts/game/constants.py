"""
Game constants for Hearts.

Wire tokens and display symbols for suits and ranks, plus the fixed
shape of the game (deck size, seats, default pass count).
"""

# Suit tables, in canonical order (Club < Diamond < Heart < Spade)
SUIT_NAMES = ['Club', 'Diamond', 'Heart', 'Spade']
SUIT_SYMBOLS = ['♣', '♦', '♥', '♠']
SUIT_LETTERS = ['C', 'D', 'H', 'S']

# Rank tables, indexed by numeric rank value
RANK_SYMBOLS = {
    2: '2', 3: '3', 4: '4', 5: '5', 6: '6', 7: '7', 8: '8', 9: '9',
    10: '10', 11: 'J', 12: 'Q', 13: 'K', 14: 'A',
}
RANK_DISPLAY = {**RANK_SYMBOLS, 10: 'T'}

# Game shape
DECK_SIZE = 52
NUM_PLAYERS = 4
CARDS_PER_HAND = DECK_SIZE // NUM_PLAYERS
DEFAULT_CARDS_TO_PASS = 3

# Standard penalty values
HEART_POINTS = 1
QUEEN_OF_SPADES_POINTS = 13
