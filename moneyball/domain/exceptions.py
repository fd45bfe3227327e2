"""
Domain exceptions for the prediction system.
"""

class PredictionException(Exception):
    """Base exception for prediction-related errors."""
    pass

class NotFoundException(PredictionException):
    """Exception raised when a team or stored prediction does not exist."""
    pass

class InvalidModelInputException(PredictionException):
    """Exception raised when malformed data reaches the prediction model (negative or non-finite values)."""
    pass

class CommentaryUnavailableException(PredictionException):
    """Exception raised when the AI commentary collaborator fails or times out."""
    pass
