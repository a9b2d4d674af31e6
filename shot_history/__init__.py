"""Shot history client: keeps a paged list of recorded shots in sync with the machine."""

__version__ = "0.1.0"
