"""Infrastructure layer — snapshot files on disk.

May import from domain. Must never import from services, commands, or output.
"""
