# ABOUTME: Exception hierarchy shared by the fetch, wiki and card layers
# ABOUTME: Every error carries enough context (url, status, title, field, country) to diagnose a failed run

from pathlib import Path


class CountryCardsError(Exception):
    """Base class for every error that aborts a run."""

    pass


class FetchError(CountryCardsError):
    """Raised when a remote resource could not be retrieved.

    Either ``status`` is set (the server answered with a non-success status) or
    ``cause`` is set (the transport failed before a response arrived).
    """

    def __init__(
        self, url: str, status: int | None = None, cause: BaseException | None = None, reason: str = ""
    ):
        self.url = url
        self.status = status
        self.cause = cause
        if status is not None:
            message = " ".join(part for part in (str(status), reason, url) if part)
        else:
            message = f"request to {url} failed: {cause}"
        super().__init__(message)


class ArticleFetchError(CountryCardsError):
    """Raised when the raw bytes of an article could not be fetched."""

    def __init__(self, title: str, cause: FetchError):
        self.title = title
        self.cause = cause
        super().__init__(f"get page error: {title}: {cause}")


class ParseError(CountryCardsError):
    """Raised when fetched article bytes do not hold a usable article."""

    def __init__(self, title: str, message: str):
        self.title = title
        super().__init__(f"{message}: {title}")


class ArticleParseError(ParseError):
    """The export document is not well-formed."""

    pass


class ArticleNotFoundError(ParseError):
    """The export document parsed but contains no page."""

    pass


class RedirectLoopError(CountryCardsError):
    """Raised when a redirect chain revisits a title or grows past the limit."""

    def __init__(self, chain: list[str], limit: int | None = None):
        self.chain = chain
        self.limit = limit
        path = " -> ".join(chain)
        if limit is None:
            super().__init__(f"redirect cycle: {path}")
        else:
            super().__init__(f"redirect chain longer than {limit}: {path}")


class MarkupError(CountryCardsError):
    """Raised when a markup value cannot be cleaned."""

    pass


class ExtractionError(CountryCardsError):
    """Raised when no extraction tier produced a value for a field."""

    def __init__(self, field: str, country: str, detail: str = ""):
        self.field = field
        self.country = country
        message = f"{country} {field} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AnswerMissingError(CountryCardsError):
    """Raised when a hand-written answer fragment is absent or has no question marker."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"missing {path} answer: {reason}")
