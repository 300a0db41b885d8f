"""
Use Cases

Organized into domain folders:
- auth/: Session lifecycle and password reset
- sessions/: Session housekeeping
- users/: Current-subject lookups
"""
