# Interest paid on positive cash, per simulation step
INTEREST_RATE = 0.02

# Day-level simulation: pre-season days before game round 1
PRESEASON_ROUNDS = 3

# Variable-income variant parameters
VARIABLE_INCOME_RATIO = 0.7  # Extra income as a share of fixed income
INITIAL_CASH_INCOME_MULTIPLE = 4  # Starting cash = 4 x fixed income

# Allowed strategy values
GRANULARITIES = ("round", "day")
STEP_ORDERS = (
    "settle_first",    # income -> transfers -> interest
    "interest_first",  # interest -> income -> transfers
)
INITIAL_CASH_POLICIES = ("stored", "income_multiple")

# League-wide leaderboards
TOP_N = 5

