import re

# Victory points needed to win a standard game of Catan. Nobody can finish above it.
WINNING_POINTS = 10
MIN_POINTS = 0

# Named participants needed for a result to count.
MIN_PLAYERS = 2

# \Z rather than $: "$" would also accept a trailing newline
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+\Z")

# Entity kinds stored under a board namespace.
KIND_GAME = "game"
KIND_PLAYER = "player"
KIND_PROFILE = "profile"
ENTITY_KINDS = (KIND_GAME, KIND_PLAYER, KIND_PROFILE)

# Hash fields of a player aggregate.
FIELD_TOTAL_POINTS = "totalPoints"
FIELD_GAMES_PLAYED = "gamesPlayed"
FIELD_WINS = "wins"

__all__ = [
    "WINNING_POINTS",
    "MIN_POINTS",
    "MIN_PLAYERS",
    "SLUG_PATTERN",
    "KIND_GAME",
    "KIND_PLAYER",
    "KIND_PROFILE",
    "ENTITY_KINDS",
    "FIELD_TOTAL_POINTS",
    "FIELD_GAMES_PLAYED",
    "FIELD_WINS",
]
