from dataclasses import dataclass


@dataclass(frozen=True)
class NoMatch:
    """The line did not match the access-log grammar at all."""

    text: str

    def __str__(self) -> str:
        return f"Text did not match regex `{self.text}`"


@dataclass(frozen=True)
class InvalidDate:
    """The grammar matched but the bracketed timestamp did not parse."""

    text: str

    def __str__(self) -> str:
        return f"Text could not be parsed into date `{self.text}`"


ParseError = NoMatch | InvalidDate


def is_parse_error(value: object) -> bool:
    return isinstance(value, (NoMatch, InvalidDate))


@dataclass(frozen=True)
class InsertionFailed:
    """A batch transaction was rolled back; its records were dropped."""

    cause: str

    def __str__(self) -> str:
        return f"Insertion error: {self.cause}"


class QueryError(Exception):
    pass


class OneTarget(QueryError):
    def __init__(self, received: int):
        super().__init__(f"One target expected: {received} received")
        self.received = received


class UnrecognizedTarget(QueryError):
    def __init__(self, target: str):
        super().__init__(f"Unrecognized target: {target}")
        self.target = target


class DatesSwapped(QueryError):
    def __init__(self, start, end):
        super().__init__(f"Start and end dates are swapped. Start: {start}, end: {end}")
        self.start = start
        self.end = end


class DbQuery(QueryError):
    def __init__(self, query: str, cause: Exception):
        super().__init__(f"Unable to execute query: {query}: {cause}")
        self.query = query
        self.cause = cause
