"""Arcade domain services: identity, game roster, matches, teams, results.

HTTP routes and socket handlers import from here, keeping transport concerns
separate from the membership and scoring rules.
"""
