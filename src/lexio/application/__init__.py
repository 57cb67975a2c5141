# Application Package
from .grading import GradingPolicy
from .scheduler import ReviewScheduler, compute_next
from .session_queue import SessionQueue

__all__ = ["GradingPolicy", "ReviewScheduler", "SessionQueue", "compute_next"]
