"""Composition helpers the host bridge calls during its own startup."""
