"""Socket.IO event names and ``game:status`` screen names shared by server and clients."""

# Client -> server commands
PLAYER_CHECK_ROOM: str = "player:checkRoom"
PLAYER_JOIN: str = "player:join"
PLAYER_SELECTED_ANSWER: str = "player:selectedAnswer"
MANAGER_CREATE_ROOM: str = "manager:createRoom"
MANAGER_KICK_PLAYER: str = "manager:kickPlayer"
MANAGER_START_GAME: str = "manager:startGame"
MANAGER_ABORT_QUIZ: str = "manager:abortQuiz"
MANAGER_NEXT_QUESTION: str = "manager:nextQuestion"
MANAGER_SHOW_LEADERBOARD: str = "manager:showLeaderboard"
MANAGER_ADD_QUESTION: str = "manager:addQuestion"
MANAGER_EDIT_QUESTION: str = "manager:editQuestion"
MANAGER_DELETE_QUESTION: str = "manager:deleteQuestion"
MANAGER_REPLACE_QUESTIONS: str = "manager:replaceQuestions"

# Server -> client notifications
GAME_STATUS: str = "game:status"
GAME_ERROR_MESSAGE: str = "game:errorMessage"
GAME_SUCCESS_ROOM: str = "game:successRoom"
GAME_SUCCESS_JOIN: str = "game:successJoin"
GAME_KICK: str = "game:kick"
GAME_RESET: str = "game:reset"
GAME_START_COOLDOWN: str = "game:startCooldown"
GAME_COOLDOWN: str = "game:cooldown"
GAME_PLAYER_ANSWER: str = "game:playerAnswer"
GAME_UPDATE_QUESTION: str = "game:updateQuestion"
MANAGER_INVITE_CODE: str = "manager:inviteCode"
MANAGER_NEW_PLAYER: str = "manager:newPlayer"
MANAGER_REMOVE_PLAYER: str = "manager:removePlayer"
MANAGER_PLAYER_KICKED: str = "manager:playerKicked"
MANAGER_QUESTIONS_UPDATED: str = "manager:questionsUpdated"

# game:status screen names
STATUS_SHOW_START: str = "SHOW_START"
STATUS_SELECT_ANSWER: str = "SELECT_ANSWER"
STATUS_WAIT: str = "WAIT"
STATUS_SHOW_RESULT: str = "SHOW_RESULT"
STATUS_SHOW_RESPONSES: str = "SHOW_RESPONSES"
STATUS_SHOW_LEADERBOARD: str = "SHOW_LEADERBOARD"
STATUS_FINISH: str = "FINISH"
