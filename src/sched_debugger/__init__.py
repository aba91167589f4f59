"""Point-in-time debug dumps of a scheduler's node cache and pending queue."""

__version__ = "0.1.0"
