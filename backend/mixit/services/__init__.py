"""Services Layer — element store, inventory, resolution coordinator, arcade goals.

Invariants:
    - Services talk to the database only through DatabaseSessionManager sessions
    - The oracle is reached only from the coordinator and the arcade goal service
"""
