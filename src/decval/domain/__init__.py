"""Domain layer — keys, metadata store, rules and pure helpers.

This layer depends only on stdlib.
It must never import from validation, model, serialization or config.
"""
