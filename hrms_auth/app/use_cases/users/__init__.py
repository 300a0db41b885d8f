"""
User Use Cases

Current-subject lookups for authenticated callers.
"""

from .load_profile_use_case import LoadProfileUseCase, ProfileResponse

__all__ = ["LoadProfileUseCase", "ProfileResponse"]
