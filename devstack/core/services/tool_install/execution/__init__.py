"""L3 Execution: everything that runs commands or touches the filesystem."""
