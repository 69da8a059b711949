"""
Firefli session core.

Session lifecycle reconciliation, activity event ingestion and Discord
notification dispatch for Roblox group workspaces.
"""

__version__ = "0.1.0"
