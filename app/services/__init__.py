"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
SpecialistService owns the specialist aggregate's rules and transactions;
offering_reconciler holds the pure reconciliation helpers it applies.
Services call repositories for DB operations and never build HTTP responses.
"""
