"""zks namespace - declared methods and wire types."""

from .api import NAMESPACE, ZKS_API, MethodDescriptor, ParamSpec, lookup_method


__all__ = [
    "NAMESPACE",
    "ZKS_API",
    "MethodDescriptor",
    "ParamSpec",
    "lookup_method",
]
