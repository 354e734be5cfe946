from app.models.event import Event
from app.models.guest import Guest, GuestStatus
from app.models.task import Task
from app.models.user import User, UserRole

__all__ = ["Event", "Guest", "GuestStatus", "Task", "User", "UserRole"]
