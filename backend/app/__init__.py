"""Lead & Quiz API - lead-capture and quiz-result submission backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
