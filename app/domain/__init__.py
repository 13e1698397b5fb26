"""
Domain layer containing core business logic and domain services.

Submodules:
- live: Live streaming domain logic (channels, chat rooms, playback).
- utils: Domain-specific utilities (e.g., ID generation).
"""
