class AppError(Exception):
    """Базовая ошибка приложения: статус, короткое сообщение и ошибки по полям"""
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None, errors: dict[str, list[str]] | None = None):
        self.message = message or self.default_message
        self.errors = errors or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        content = {"message": self.message}
        if self.errors:
            content["errors"] = self.errors
        return content


class ValidationError(AppError):
    status_code = 422
    default_message = "The given data was invalid."

    @classmethod
    def for_field(cls, field: str, message: str):
        return cls(message, errors={field: [message]})


class AuthenticationError(AppError):
    status_code = 422
    default_message = "Provided email address or password is incorrect"


class UnauthenticatedError(AppError):
    status_code = 401
    default_message = "Unauthenticated."


class NotFoundError(AppError):
    status_code = 404
    default_message = "User not found."


class InternalError(AppError):
    status_code = 500
