from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class AnnotatedResource(Generic[T]):
    item: T
    is_frozen: bool
