"""Simulation cores for small 2D games: physics, particles, arcade game rules and helpers."""

__version__ = "0.1.0"