"""Record store access: connection pool, table definition and the listing query."""
