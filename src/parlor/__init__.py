"""Parlor - authorization core for a chat and community platform.

Decides whether a user may perform a set of actions on a channel, message,
community, direct-message group or the instance itself, and manages the
roles that back those decisions.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
