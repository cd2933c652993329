"""
User-facing text in Russian (default) and English.

Keys are dotted paths; error texts live under "errors.<kind>".
"""

from .errors import ErrorKind

DEFAULT_LANGUAGE = "ru"

RESOURCES: dict[str, dict[str, str]] = {
    "ru": {
        "errors.required": "Не должно быть пустым",
        "errors.notUrl": "Ссылка должна быть валидным URL",
        "errors.exists": "RSS уже существует",
        "errors.noRss": "Ресурс не содержит валидный RSS",
        "errors.network": "Ошибка сети",
        "errors.unknown": "Неизвестная ошибка. Что-то пошло не так.",
        "loading.success": "RSS успешно загружен",
        "feeds.title": "Фиды",
        "posts.title": "Посты",
        "posts.preview": "Просмотр",
        "modal.readFull": "Читать полностью",
        "modal.close": "Закрыть",
        "form.placeholder": "ссылка RSS",
        "form.submit": "Добавить",
    },
    "en": {
        "errors.required": "Must not be empty",
        "errors.notUrl": "Link must be a valid URL",
        "errors.exists": "RSS already exists",
        "errors.noRss": "Resource does not contain a valid RSS",
        "errors.network": "Network error",
        "errors.unknown": "Unknown error. Something went wrong.",
        "loading.success": "RSS has been loaded",
        "feeds.title": "Feeds",
        "posts.title": "Posts",
        "posts.preview": "Preview",
        "modal.readFull": "Read full article",
        "modal.close": "Close",
        "form.placeholder": "RSS link",
        "form.submit": "Add",
    },
}

# Message key for each error kind; RSS failures use the "noRss" text
ERROR_KEYS: dict[ErrorKind, str] = {
    ErrorKind.REQUIRED: "errors.required",
    ErrorKind.NOT_URL: "errors.notUrl",
    ErrorKind.EXISTS: "errors.exists",
    ErrorKind.RSS: "errors.noRss",
    ErrorKind.NETWORK: "errors.network",
    ErrorKind.UNKNOWN: "errors.unknown",
}


def translate(key: str, lng: str = DEFAULT_LANGUAGE) -> str:
    """
    Look up a message, falling back to the default language.

    Unknown "errors.*" keys resolve to "errors.unknown"; other unknown keys
    are returned unchanged.
    """
    for table in (RESOURCES.get(lng, {}), RESOURCES[DEFAULT_LANGUAGE]):
        if key in table:
            return table[key]
    if key.startswith("errors."):
        return translate("errors.unknown", lng)
    return key


def error_message(kind: ErrorKind | None, lng: str = DEFAULT_LANGUAGE) -> str:
    """Text for an error kind; None yields an empty string."""
    if kind is None:
        return ""
    return translate(ERROR_KEYS[kind], lng)
