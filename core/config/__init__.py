"""Configuration package for the fish fight simulation.

Constants live in small topical modules (world, actors, server); the
dataclasses in ``simulation_config`` bundle them into runtime settings.
"""
