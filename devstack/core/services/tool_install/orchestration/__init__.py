"""L4 Orchestration: full install and uninstall runs."""
