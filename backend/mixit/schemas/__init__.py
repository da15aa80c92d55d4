"""Pydantic Schemas — validation at the engine boundary.

Invariants:
    - Schemas validate untrusted input (oracle answers) and shape engine results
    - Separate from models: schemas are contracts, models are persistence
"""
