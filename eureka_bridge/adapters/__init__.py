"""Adapter package for registry I/O implementations.

Purpose:
    Collect the HTTP transport, error taxonomy, Eureka wire client and the
    ``RegistryAdapter`` implementation built on top of them.

Dependencies:
    Submodules depend on ``requests`` and on the domain models/ports.

Call context:
    Imported by ``eureka_bridge.app.factories`` for runtime wiring and by
    tests for transport-level behavior verification.
"""
