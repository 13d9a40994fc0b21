"""Interfaces (application boundary) for SHELTER.

Defines framework-free application contracts: ABCs for the external
collaborators (authorization, billing ledger, breed catalog, price exchange),
the persisted store, id generation and metrics, plus the small DTOs they
exchange. Business rules stay out of this package.

Dependency rule: this package is independent. Do not import from any other
`shelter.*` package. It may be imported by `shelter.service_layer`,
`shelter.adapters`, and `shelter.bootstrap`.
"""
