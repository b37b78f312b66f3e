"""Iteration status reported by a benchmark suite."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class StatusKind(IntEnum):
    """The category of an iteration status."""

    SUCCESS = 0
    ERROR = 1
    CLIENT_ERROR = 2
    SERVER_ERROR = 3

    def __str__(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    StatusKind.SUCCESS: "Success",
    StatusKind.ERROR: "Error",
    StatusKind.CLIENT_ERROR: "Client Error",
    StatusKind.SERVER_ERROR: "Server Error",
}


@dataclass(frozen=True, order=True)
class Status:
    """An iteration status: a kind and a numeric code."""

    kind: StatusKind
    code: int

    @classmethod
    def success(cls, code: int) -> Status:
        return cls(StatusKind.SUCCESS, code)

    @classmethod
    def client_error(cls, code: int) -> Status:
        return cls(StatusKind.CLIENT_ERROR, code)

    @classmethod
    def server_error(cls, code: int) -> Status:
        return cls(StatusKind.SERVER_ERROR, code)

    @classmethod
    def error(cls, code: int) -> Status:
        return cls(StatusKind.ERROR, code)

    @classmethod
    def from_http(cls, code: int) -> Status:
        """Classify an HTTP status code (100-999)."""
        if not 100 <= code <= 999:
            raise ValueError(f"invalid HTTP status code: {code}")
        if 200 <= code < 300:
            kind = StatusKind.SUCCESS
        elif 400 <= code < 500:
            kind = StatusKind.CLIENT_ERROR
        elif 500 <= code < 600:
            kind = StatusKind.SERVER_ERROR
        else:
            kind = StatusKind.ERROR
        return cls(kind, code)

    def __str__(self) -> str:
        return f"{self.kind}({self.code})"