from .response_wrappers import PaginatedResponse, SuccessResponse

__all__ = ["PaginatedResponse", "SuccessResponse"]
