"""Application layer: services, command line and web UI."""
