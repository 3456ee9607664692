"""Infrastructure layer — SQLite store, repositories, seed data.

May import from domain and config. Must never import from services,
commands, or output.
"""
