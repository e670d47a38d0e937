"""Service layer — orchestrates config, backends, and the resolver."""
