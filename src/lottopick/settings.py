from __future__ import annotations
from dataclasses import dataclass, replace as _replace

RANGE_MESSAGE = "Mínimo deve ser menor que o Máximo."
CAPACITY_MESSAGE = "Intervalo insuficiente."
COUNT_MESSAGE = "Quantidade deve ser pelo menos 1."


class SettingsError(ValueError):
    """Settings that cannot produce a draw. `message` is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RangeError(SettingsError):
    def __init__(self, message: str = RANGE_MESSAGE):
        super().__init__(message)


class CapacityError(SettingsError):
    def __init__(self, message: str = CAPACITY_MESSAGE):
        super().__init__(message)


class CountError(SettingsError):
    def __init__(self, message: str = COUNT_MESSAGE):
        super().__init__(message)


@dataclass(frozen=True)
class GeneratorSettings:
    min: int = 1
    max: int = 60
    count: int = 6
    unique: bool = True
    sorted: bool = True

    @property
    def span(self) -> int:
        """How many distinct values [min, max] holds."""
        return self.max - self.min + 1

    def validate(self) -> None:
        """Check the range first, then the count against it."""
        if self.min >= self.max:
            raise RangeError()
        if self.count < 1:
            raise CountError()
        if self.unique and self.count > self.span:
            raise CapacityError()

    def replace(self, **changes) -> "GeneratorSettings":
        return _replace(self, **changes)
