"""
Aurawatch - A log tailing daemon for VRChat aura unlocks.

This package follows VRChat's rotating output logs, detects
authentication and aura unlock lines, and hands newly observed
unlocks to notifiers while suppressing backlog replays.
"""

__version__ = "0.1.0"
