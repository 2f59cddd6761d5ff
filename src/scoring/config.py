"""Configuration for fantasy scoring and standings."""

# Bucket for performances no franchise owns
FREE_AGENT = "Free Agent"

# Captaincy multipliers, applied while a match is not phase-fixed
CAPTAIN_MULTIPLIER = 2.0
VICE_CAPTAIN_MULTIPLIER = 1.5
DEFAULT_MULTIPLIER = 1.0

# Flat bonus baked into raw points for the Player of the Match
POTM_BONUS = 100

# Batting
POINTS_PER_RUN = 1
BOUNDARY_BONUS = {"fours": 1, "sixes": 2}
DUCK_PENALTY = -2
# Highest milestone reached only
RUN_MILESTONES = [(100, 32), (75, 16), (50, 8), (30, 4)]
STRIKE_RATE_MIN_BALLS = 10
# (lower bound inclusive, upper bound exclusive, points); None = open ended
STRIKE_RATE_BANDS = [
    (None, 70.0, -4),
    (70.0, 100.0, -2),
    (130.0, 150.0, 2),
    (150.0, 170.0, 4),
    (170.0, None, 6),
]

# Bowling
POINTS_PER_WICKET = 25
MAIDEN_BONUS = 12
# Highest haul reached only
WICKET_HAULS = [(5, 32), (4, 16), (3, 8)]
ECONOMY_MIN_OVERS = 2.0
ECONOMY_BANDS = [
    (None, 5.0, 6),
    (5.0, 6.0, 4),
    (6.0, 7.0, 2),
    (9.0, 10.0, -2),
    (10.0, 11.0, -4),
    (11.0, None, -6),
]

# Fielding
POINTS_PER_CATCH = 8
POINTS_PER_STUMPING = 12
RUN_OUT_DIRECT = 12
RUN_OUT_ASSISTED = 6
CATCH_BONUS_THRESHOLD = 3
CATCH_BONUS = 4
