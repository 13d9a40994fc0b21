"""Adapters (infrastructure) for SHELTER.

Provide concrete implementations of the ports in `shelter.interfaces`
(persisted store, in-memory collaborators, id generators, metrics), plus
persistence mapping and related wiring (engines, metadata, migrations).

Dependency rule: may import `shelter.interfaces` and `shelter.domain`; the
inner layers must not import this package.
"""
