"""Core Layer — pure domain logic: errors, types and input checks.

Invariants:
    - Core NEVER imports from infrastructure, services or api
    - Every function here is synchronous and side-effect free

Design Decisions:
    - Functional core, imperative shell: checks return messages, shell raises
"""
