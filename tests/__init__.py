"""SHELTER test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Shared behavior/invariants enforced across every store adapter.
- integration/  : Real interactions with SQLite files and Alembic migrations.
- e2e/          : The command-line interface driven through click's CliRunner.
- fixtures/     : Shared pytest fixtures (no tests here).

General guidance
- Keep unit fast and deterministic (no real I/O); prefer in-memory collaborators
  over mocks at boundaries.
- Async tests are marked with @pytest.mark.asyncio (strict mode).
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit, contract, integration, e2e, property
"""
