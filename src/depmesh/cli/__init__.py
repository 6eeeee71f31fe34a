"""depmesh command line interface."""
