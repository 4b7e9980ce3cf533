class ReadinessGate:
    """One-shot flag raised once the client can safely touch the live document.

    The flag starts lowered and is raised exactly once; there is no way to
    lower it again.
    """

    def __init__(self):
        self._ready = False

    def is_ready(self) -> bool:
        return self._ready

    def mark_ready(self) -> bool:
        """Raise the flag. Returns True only for the call that raised it."""
        if self._ready:
            return False
        self._ready = True
        return True
