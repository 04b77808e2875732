class BlogError(Exception):
    """Базовая ошибка приложения"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BlogError):
    """Отсутствует или пустое обязательное поле поста"""


class InvalidIdentifier(BlogError):
    """Идентификатор не может быть разобран хранилищем"""


class NotFound(BlogError):
    """Запись с корректным идентификатором не найдена"""


class DatabaseConnectionError(BlogError):
    """База данных недоступна"""


class DatabaseUnavailableError(BlogError):
    """Сессия запрошена до подключения к базе данных"""


class BindError(BlogError):
    """Не удалось занять порт для HTTP сервера"""


class ListenerCloseError(BlogError):
    """HTTP сервер завершился с ошибкой при остановке"""


class InvalidStateError(BlogError):
    """Операция жизненного цикла вызвана в неверном состоянии"""
