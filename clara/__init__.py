"""Clara - pass-through JSON-RPC gateway for the zkSync `zks` namespace."""

__version__ = "0.1.0"
