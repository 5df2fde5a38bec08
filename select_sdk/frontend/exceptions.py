# select_sdk/frontend/exceptions.py
from select_sdk.exceptions import SelectSDKError


class FrontendError(SelectSDKError):
    """Базовый класс для ошибок фронтенд-части SDK."""
    pass


class RenderingError(FrontendError):
    """Ошибка во время рендеринга шаблона поля."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
