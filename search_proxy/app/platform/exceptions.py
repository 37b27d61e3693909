class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass

class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)

class SearchQueryRequired(InvalidInput):
    def __init__(self):
        super().__init__("Search query is required!")

class ParamMustBePositiveNumber(InvalidInput):
    def __init__(self, param_name: str):
        super().__init__(f"Param {param_name} must be a number and greater than zero.")
        self.param_name = param_name

class BackingServiceError(DomainError):
    """외부(업스트림) 서비스 호출 실패."""
    def __init__(self, service: str, reason: str | None = None):
        super().__init__(reason or f"Error trying get {service} data.")
        self.service = service

class UpstreamSearchFailed(BackingServiceError):
    def __init__(self, detail: str | None = None):
        super().__init__("DuckDuckGo API", "Error trying get DuckDuckGo API data.")
        self.detail = detail
