"""Process clients and host services for dockhost."""
