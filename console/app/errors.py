class ConsoleError(Exception):
    """Raised by console actions that hand a result back to the caller (execute_command)."""
