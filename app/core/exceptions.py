class SubscriptionsError(Exception):
    """Base exception for all domain exceptions"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class EntityNotFoundError(SubscriptionsError):
    """Raised when an entity is not found in the database"""
    pass

class InvalidInputError(SubscriptionsError):
    """Raised when request input is malformed (dates, ids, prices)"""
    pass

class InternalServiceError(SubscriptionsError):
    """Raised when an operation fails for reasons the client can't fix"""
    pass
