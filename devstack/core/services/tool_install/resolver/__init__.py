"""L2 Resolver: turn a recipe and a platform into an acquisition plan."""
