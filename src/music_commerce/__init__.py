"""Music commerce resource API - access core, registry and configuration."""
