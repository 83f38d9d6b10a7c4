"""Domain layer — requests, rules, secret records, and completion heuristics.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
