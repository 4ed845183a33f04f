# Kernel sources package
from .registry import register_kernel, load_kernel, list_kernels

__all__ = [
    "load_kernel",
    "register_kernel",
    "list_kernels",
]
