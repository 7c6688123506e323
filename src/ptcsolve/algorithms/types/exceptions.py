"""
Custom exceptions for the algorithms package.
"""

class PtcError(Exception):
    """Base exception for ptcsolve errors.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class BackendError(PtcError):
    """Raised when a backend collaborator breaks its contract.
    
    Parameters
    ----------
    message : str
        The error message.
    """
    
    def __init__(self, message: str):
        super().__init__(message)


class EngineError(PtcError):
    """Raised when an exception occurs in the engine.
    
    Parameters
    ----------
    message : str
        The error message.
    """
    
    def __init__(self, message: str):
        super().__init__(message)


class InitialResidualError(PtcError):
    """Raised when the residual is undefined (NaN) at the initial state.

    No continuation can start from such a point since there is no earlier
    committed state to fall back to.

    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)
