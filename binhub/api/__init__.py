"""API Layer — FastAPI routes, templates, session helpers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - HTML pages follow Post/Redirect/Get; JSON only for /catalog, /events, /health
"""
