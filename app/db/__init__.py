"""
Módulo de acceso a la API de Poynt.

- PoyntRequestExecutor: Gestión exclusiva del transporte HTTP
- OrderClient: Construcción de requests de órdenes
"""

from app.db.poynt_clients import OrderClient, PoyntRequestExecutor, RequestDescriptor

__all__ = [
    "PoyntRequestExecutor",
    "RequestDescriptor",
    "OrderClient",
]
