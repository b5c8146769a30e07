import math
import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable, Generic, Mapping, Optional, TypeVar

from core.domain import EXPENSE, KINDS, ErrorKind, Transaction, ValidationError
from core.periods import is_future_date, to_date

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')

INVALID_INPUT_MESSAGE = "Fill in description, amount and date."
FUTURE_DATE_MESSAGE = "The date cannot be in the future."
DEFAULT_CATEGORY = "Other"


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()

    @abstractmethod
    def to_either(self, error: E) -> 'Either[E, T]':
        pass


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def to_either(self, error: E) -> 'Either[E, T]':
        return Right(self._value)

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def to_either(self, error: E) -> 'Either[E, T]':
        return Left(error)

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


# Plain decimal with optional exponent; no digit separators, hex or words
_AMOUNT_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_amount(raw) -> Maybe[float]:
    """Some(number) for a finite, nonzero amount; Nothing otherwise.

    Blank input, text that is not a number and zero are all rejected alike.
    """
    if raw is None or isinstance(raw, bool):
        return Nothing()
    text = str(raw).strip()
    if not _AMOUNT_RE.fullmatch(text):
        return Nothing()
    value = float(text)
    if not math.isfinite(value) or value == 0:
        return Nothing()
    return Some(value)


def parse_date(raw) -> Maybe[date]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return Nothing()
    try:
        return Some(to_date(raw))
    except (TypeError, ValueError):
        return Nothing()


def parse_kind(raw) -> Maybe[str]:
    kind = _clean(raw or EXPENSE).lower()
    return Some(kind) if kind in KINDS else Nothing()


def non_blank(raw) -> Maybe[str]:
    text = _clean(raw)
    return Some(text) if text else Nothing()


def _clean(raw) -> str:
    return str(raw).strip() if raw is not None else ""


def _optional(raw) -> Optional[str]:
    return _clean(raw) or None


def invalid_input() -> ValidationError:
    return ValidationError(ErrorKind.INVALID_INPUT, INVALID_INPUT_MESSAGE)


def future_date() -> ValidationError:
    return ValidationError(ErrorKind.FUTURE_DATE, FUTURE_DATE_MESSAGE)


def _field(name: str, value: Maybe, error: ValidationError):
    def _step(fields: dict) -> Either[ValidationError, dict]:
        return value.map(lambda v: {**fields, name: v}).to_either(error)

    return _step


def _not_future(now: datetime):
    def _step(fields: dict) -> Either[ValidationError, dict]:
        if is_future_date(fields["date"], now):
            return Left(future_date())
        return Right(fields)

    return _step


def validate_and_build(
    form: Mapping[str, object],
    kind: Optional[str] = None,
    now: Optional[datetime] = None,
    default_category: str = DEFAULT_CATEGORY,
) -> Either[ValidationError, Transaction]:
    """Turn raw form fields into a Transaction, or say why not.

    Checks run in order and the first failure wins: description, amount,
    date present, date not in the future.
    """
    now = now or datetime.now()

    return (
        Right({})
        .bind(_field("description", non_blank(form.get("description")), invalid_input()))
        .bind(_field("amount", parse_amount(form.get("amount")), invalid_input()))
        .bind(_field("date", parse_date(form.get("date")), invalid_input()))
        .bind(_not_future(now))
        .bind(_field("kind", parse_kind(kind or form.get("kind")), invalid_input()))
        .map(lambda fields: Transaction(
            date=fields["date"].isoformat(),
            category=_clean(form.get("category")) or default_category,
            kind=fields["kind"],
            description=fields["description"],
            amount=abs(fields["amount"]),
            method=_optional(form.get("method")),
            note=_optional(form.get("note")),
        ))
    )
