"""Formation engine, game session, statistics and reporting services."""
