class CrewCenterException(Exception):
    """Base exception for all crew center backend errors"""
    pass


class NetworkFeedException(CrewCenterException):
    """Exception raised when a flight-tracking network feed cannot be fetched"""

    def __init__(self, network: str, message: str):
        self.network = network
        super().__init__(f"{network}: {message}")


class MalformedFeedException(NetworkFeedException):
    """Exception raised when a network feed payload does not match its expected shape"""
    pass


class PersistenceException(CrewCenterException):
    """Exception raised when a write to the flight/fleet/pilot store fails"""
    pass


class AuthenticationException(CrewCenterException):
    """Exception raised for authentication errors"""
    pass

