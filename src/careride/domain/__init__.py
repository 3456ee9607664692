"""Domain layer — types, models, ranking and entitlement rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
