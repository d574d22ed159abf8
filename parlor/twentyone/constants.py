"""Twenty-One rule constants."""

# Highest score that is not a bust
BUST_LIMIT = 21

# Dealer hits below this score and holds at or above it
STOPPING_SCORE = 17

# Amount an Ace drops by when it is counted as 1 instead of 11
ACE_ADJUSTMENT = 10

# Chip balance a player starts (and restarts) with
INITIAL_CHIP_COUNT = 25

# A win returns the bet plus the same again
WIN_PAYOUT_MULTIPLIER = 2
