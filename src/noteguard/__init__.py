"""
NoteGuard Backend - Encrypted, self-expiring notes

Stores notes encrypted at rest, lets owners publish time-limited public share
links and purges expired content in the background.

Version: 1.0.0
"""

__version__ = "1.0.0"
