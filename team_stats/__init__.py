"""
Team Stats - Roster Stat Resolution Engine

Computes each unit's effective HP/ATK/DEF inside a 7-slot roster from its
base stats, its tiered skills and the leader/friend skills of the team.
"""

__version__ = "0.1.0"
