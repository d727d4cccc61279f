"""Services Layer — one module per marketplace API resource group.

Invariants:
    - Each function takes the client and the caller's token, returns ApiResult
    - No parsing, no toasts, no HTTP semantics beyond the endpoint path
"""
