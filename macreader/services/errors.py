class CatalogError(Exception):
    """Base exception for catalog search failures"""
    pass


class InvalidURLError(CatalogError):
    """Exception raised when the query cannot be turned into a request URL"""
    pass


class NetworkError(CatalogError):
    """Exception raised when the request fails at the transport level"""
    pass


class EmptyResponseError(CatalogError):
    """Exception raised when the request succeeds but carries no body"""
    pass


class DecodeError(CatalogError):
    """Exception raised when the response body is not a JSON object"""
    pass
