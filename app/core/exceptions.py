class SearchError(Exception):
    code = "SEARCH_ERROR"
    message = "Search failed"
    status_code = 500

    def __init__(self, message: str | None = None, details=None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

class GatewayError(SearchError):
    code = "GATEWAY_ERROR"
    message = "The catalog store could not be reached"

class InvalidQueryError(SearchError):
    code = "INVALID_QUERY"
    message = "The search query is invalid"
    status_code = 400

class InvalidProductError(SearchError):
    code = "INVALID_PRODUCT"
    message = "The catalog document is not a valid product"
