"""
Where: services/catalog/services/grpc_channel.py
What: Helper for opening per-call gRPC channels to sibling services.
Why: Centralize channel creation; TLS is terminated by the mesh, so channels
     are insecure.
"""

import grpc

_SCHEMES = ("http://", "https://", "grpc://")


def normalize_target(address: str) -> str:
    """Registry addresses may carry a URL scheme; gRPC wants host:port."""
    for scheme in _SCHEMES:
        if address.startswith(scheme):
            address = address[len(scheme) :]
            break
    return address.rstrip("/")


def create_insecure_channel(address: str) -> grpc.aio.Channel:
    return grpc.aio.insecure_channel(normalize_target(address))  # ty: ignore[possibly-missing-attribute]
