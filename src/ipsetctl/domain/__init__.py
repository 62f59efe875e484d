"""Domain layer — IP set targets and pure address-list rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
