"""Domain layer — item variants, error taxonomy, result values.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
