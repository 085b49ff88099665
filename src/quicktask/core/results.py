# src/quicktask/core/results.py

"""Explicit success/failure values for store calls made by the controller."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..tasks.task_store import StorageError, ValidationError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    error: StorageError | ValidationError


def attempt(fn: Callable[..., T], *args: object) -> Ok[T] | Err:
    """
    Run one store call and capture its outcome.

    Only storage and validation errors become Err; anything else is a bug and
    propagates.
    """
    try:
        return Ok(fn(*args))
    except (StorageError, ValidationError) as e:
        return Err(e)
