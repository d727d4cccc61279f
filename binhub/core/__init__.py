"""Core Layer — pure presentation logic over API records.

Invariants:
    - No IO: nothing in core/ touches the network, the session, or templates
    - Every function is deterministic given its inputs
"""
