"""HTTP client for the metadata service of a distributed block storage cluster."""

__version__ = "0.1.0"

__all__ = [
    "basehttp",
    "common",
    "mds",
    "namespace",
    "nameserver2",
    "protocommon",
    "statuscode",
    "topology",
    "topology_proto",
]