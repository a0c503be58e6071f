"""Static metadata describing QuizLive."""

APP_NAME = "QuizLive"
APP_VERSION = "0.1.0"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizLive runs live multiplayer quizzes: a manager opens a room, players join "
    "with the invite code and answer timed questions while the server keeps score."
)
