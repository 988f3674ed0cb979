"""Base exception for every error raised by memoryboard."""


class MemoryBoardError(Exception):
    """Root of the memoryboard error taxonomy. Nothing raised here is process-fatal."""
    pass
