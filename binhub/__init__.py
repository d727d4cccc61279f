"""BinHub Web — admin dashboard and mobile-web views for the bin rental marketplace.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
