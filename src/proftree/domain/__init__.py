"""Domain layer — ownership-tree engine and the two schema shapes.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
It performs no I/O and no logging.
"""
