"""Mixit Package — combination resolution and caching engine for an element-mixing game.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
    - Public entry point is mixit.engine (MixitEngine, open_engine)
"""
