"""dfreport: df-style table of the storage volumes visible to the OS."""

__version__ = "0.1.0"
