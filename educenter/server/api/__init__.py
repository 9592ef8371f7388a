"""HTTP API: request dependencies and versioned routers."""
