from .clock import SessionClock  # noqa: F401
from .policy import AdvanceDelays, QuizPolicy  # noqa: F401
from .quiz import Phase, QuizSession  # noqa: F401
