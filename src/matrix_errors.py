"""Exceptions raised while building Distance Matrix request URLs."""

from __future__ import annotations

from typing import Iterable, List


class DistanceMatrixError(Exception):
    pass


class InvalidConfiguration(DistanceMatrixError, ValueError):
    pass


class InvalidMatrix(DistanceMatrixError):
    """Matrix (or its configuration) cannot produce a request URL."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("Invalid matrix: " + "; ".join(self.errors))


class MatrixUrlTooLong(DistanceMatrixError):
    """The assembled URL exceeds the API's maximum length.

    Only the lengths are kept; the URL may carry credentials.
    """

    def __init__(self, length: int, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Matrix URL is {length} characters, maximum is {max_length}."
        )
