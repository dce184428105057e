"""kubemapper: Kubernetes resource relationship mapper."""

__version__ = "0.1.0"
