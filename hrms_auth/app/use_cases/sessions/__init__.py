"""
Session Housekeeping Use Cases
"""

from .cleanup_sessions_use_case import CleanupSessionsResponse, CleanupSessionsUseCase

__all__ = ["CleanupSessionsUseCase", "CleanupSessionsResponse"]
