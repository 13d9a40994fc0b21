"""Domain layer for SHELTER.

Contains business rules: the derived `Cat` view, the add-cat request, the
pricing rule and the error taxonomy surfaced to callers. This package is
deliberately technology-agnostic.

Dependency rule: do not import from `shelter.adapters` or `shelter.entrypoints`.
"""
