"""Quiz timing, scoring and validation constants shared by the core services."""

DEFAULT_QUIZ_NAME: str = "QuizLive Quiz"
DEFAULT_TIME_LIMIT_SECONDS: int = 20

START_DELAY_SECONDS: int = 3
START_COOLDOWN_SECONDS: int = 3

MAX_POINTS: int = 1000
LEADERBOARD_SIZE: int = 5
PODIUM_SIZE: int = 3

ROOM_CODE_LENGTH: int = 6
MIN_USERNAME_LENGTH: int = 1
MAX_USERNAME_LENGTH: int = 20
MIN_ANSWER_COUNT: int = 2
