"""Orders API Package: products, orders and their line items over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
