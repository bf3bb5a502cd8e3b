"""Domain layer: types, policy rules, and the layout engine.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
