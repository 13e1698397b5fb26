"""
Live streaming domain logic.

Includes:
- stream: Starting, listing and viewing IVS live streams with their chat rooms.
"""
