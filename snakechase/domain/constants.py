"""
Game constants for snakechase.
"""

# Movement directions
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITES = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

# Input commands
TURN_UP = "turn_up"
TURN_DOWN = "turn_down"
TURN_LEFT = "turn_left"
TURN_RIGHT = "turn_right"
BOOST = "boost"
TURN_COMMANDS = {TURN_UP: UP, TURN_DOWN: DOWN, TURN_LEFT: LEFT, TURN_RIGHT: RIGHT}
VALID_COMMANDS = set(TURN_COMMANDS) | {BOOST}

# Arena
CELL_SIZE = 20
INITIAL_ARENA_WIDTH = 400
INITIAL_ARENA_HEIGHT = 400
SHRINK_STEP = 20  # per side, per food eaten
MIN_ARENA_SIZE = 100

# Snake timing (milliseconds)
BASE_SNAKE_INTERVAL = 150
MIN_SNAKE_INTERVAL = 50
SPEED_GAIN_PER_FOOD = 5
BOOST_DURATION = 500
BOOST_MULTIPLIER = 0.4

# Food behaviour
FOOD_INTERVAL = 100
FLEE_DISTANCE = CELL_SIZE * 2
MAX_LONG_ESCAPES = 1
MIN_CHASE_TIME_FOR_ESCAPE = 3000
MAX_CHASE_TIME_FOR_ESCAPE = 5000
LONG_ESCAPE_CHANCE = 0.05
DIRECTION_BONUS = 100
LONG_ESCAPE_BONUS = 200
BORDER_PENALTY = 20

# Scoring
FOOD_REWARD = 10

# Scheduler task names
SNAKE_TASK = "snake"
FOOD_TASK = "food"
