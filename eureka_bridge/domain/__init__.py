"""Domain models and ports for the registry bridge.

Purpose:
    Hold transport-free types: the bridge's ``ServiceRecord``, the registry
    ``Instance`` wire record, and the ``RegistryAdapter`` port.

Call context:
    Imported by adapters (for mapping and typing) and by the composition root
    in ``eureka_bridge.app``.
"""
