"""L0 Data: catalog, recipes and removal commands. Pure data, no logic."""
