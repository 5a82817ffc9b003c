"""HTTP trigger for whitelisted ZFS snapshots."""

__version__ = "0.1.0"
