"""Services Layer — request handlers that sit between routes and storage.

Invariants:
    - Services validate, call storage, and translate outcomes into errors
    - Routes never talk to the repository directly
"""
