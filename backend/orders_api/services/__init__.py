"""Services Layer: managers orchestrating pure rules around store IO.

Invariants:
    - Managers receive their stores through the constructor
    - Rules from core/ run before any write reaches a store
"""
