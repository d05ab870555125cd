class InvalidInterval(ValueError):
    """Raised when a time interval is malformed (start >= end, bad zone, bad timestamp)."""
    pass
