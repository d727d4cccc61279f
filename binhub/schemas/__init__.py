"""Schemas — API record mirrors and HTML form models.

Invariants:
    - records.py models are built only from API responses
    - forms.py models are built only from browser form submissions
"""
