"""Release flow: project tests, link rendering and orchestration."""
