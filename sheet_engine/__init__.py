"""
Character sheet rules engine.

Pure calculations behind a dice-pool tabletop RPG character sheet: skill
dice pools, resource dice, derived resources, carry capacity, movement,
senses and level progression.
"""

__version__ = "0.1.0"
