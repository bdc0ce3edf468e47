"""
RPSLS Game Service Package

This package contains the FastAPI application, the resilient random-number
client, and the Rock-Paper-Scissors-Lizard-Spock rules engine.
"""

__version__ = "1.0.0"
