# aircraftpath/path_planner/exceptions.py

class AircraftPathError(Exception):
    """Base exception for all aircraft path errors"""
    pass

class InvalidSettingsError(AircraftPathError):
    """Raised when a settings block cannot be read from its source."""
    def __init__(self, message: str, block: str = "movement"):
        """
        Args:
            block: "bezier"|"attack"|"dead_zone"|"movement"
        """
        self.block = block
        super().__init__(message)
