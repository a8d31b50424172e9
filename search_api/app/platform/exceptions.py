class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass

class ResourceNotFound(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource

class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)

class BackendUnavailable(DomainError):
    """
    검색 백엔드(OpenSearch) 호출 실패.
    네트워크 오류, 5xx, 타임아웃 등을 모두 포함한다.
    """
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Search backend failed during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
