"""Global pytest fixtures for SHELTER."""

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.collaborators",
]
