"""Validation layer — validators, their registry, rule builders and the engine.

May import from domain. Must never import from serialization or plugins;
model imports are deferred to call time inside the engine.
"""
