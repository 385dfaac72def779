"""
Exception classes for the wheel engine.

Every error the engine raises on purpose lives here so callers can catch
``SpinWheelError`` and show one message.
"""


class SpinWheelError(Exception):
    """Base class for all wheel engine errors"""
    pass


# ============ Spin errors ============

class SpinRejected(SpinWheelError):
    """A spin cannot start right now (already spinning, empty wheel, game over)"""
    pass


class InvariantViolation(SpinWheelError):
    """Roster state the engine should never reach, e.g. no safe section to land on"""
    pass


class EngineDefect(SpinWheelError):
    """The landing safety net kept firing past its retry bound"""
    def __init__(self, attempts):
        self.attempts = attempts
        super().__init__(f"Wheel landed on the protected section {attempts} times in a row")


# ============ Designation errors ============

class DesignationError(SpinWheelError):
    """The designated winner could not be restored to exactly one flagged entry"""
    def __init__(self, name):
        self.name = name
        super().__init__(f"Designated winner {name!r} is not on the wheel or is not flagged")


# ============ Roster errors ============

class EntryNotFound(SpinWheelError):
    """No live entry with this id"""
    def __init__(self, entry_id):
        self.entry_id = entry_id
        super().__init__(f"Entry {entry_id} not found")
