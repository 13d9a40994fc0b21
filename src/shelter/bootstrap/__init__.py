"""Bootstrap (composition root) for SHELTER.

Assembles the application at runtime: wires concrete adapters (persisted
store, id generator, metrics sink) and the caller-supplied collaborators into
the `ShelterService` facade, and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `shelter.adapters`, `shelter.service_layer`,
  `shelter.interfaces`, `shelter.domain`, and `shelter.config`.
- Inner layers must not import `shelter.bootstrap`.

Public surface:
- `bootstrap()`, `build_store()` and `AppContainer`.
- No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import AppContainer, bootstrap, build_store

__all__ = ["AppContainer", "bootstrap", "build_store"]
