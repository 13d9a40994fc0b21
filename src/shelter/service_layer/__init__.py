"""Service layer for SHELTER.

Implements the application use cases: the resilient call executor every
outbound call goes through, the record/domain conversions, the catalog
aggregator, the favourites maintainer and the `ShelterService` facade.

Dependency rule: may import `shelter.domain` and `shelter.interfaces`, but not
`shelter.adapters` or `shelter.entrypoints`.
"""
