"""Rich rendering primitives."""
