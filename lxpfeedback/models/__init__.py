from .learner import Learner
from .feedback_question import FeedbackQuestion
from .feedback_option import FeedbackOption
from .feedback_response import FeedbackResponse

__all__ = [
	"Learner",
	"FeedbackQuestion",
	"FeedbackOption",
	"FeedbackResponse",
]
