"""
Tool installation service.

Layered like the rest of the core (each layer only imports the ones
above it):

    data           → catalog, recipes, undo commands (pure data)
    detection      → platform and version probes (read-only)
    resolver       → recipe + platform → acquisition plan
    execution      → subprocess runner, installer, remover, pre-commit env
    orchestration  → full install / uninstall runs
"""
