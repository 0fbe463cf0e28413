from .category import Category
from .task import Task, TaskStatus
from .user import User, UserRole

# Export all models for easy importing
__all__ = ["Category", "Task", "TaskStatus", "User", "UserRole"]
