"""Bounded level values: LED brightness and text scrolling speed."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Brightness(BaseModel):
    """LED brightness level (0 = dimmest, 15 = brightest)."""

    model_config = ConfigDict(frozen=True)

    MIN_VALUE: ClassVar[int] = 0
    MAX_VALUE: ClassVar[int] = 15

    level: int = Field(ge=0, le=15, description="Brightness level (0-15)")

    @classmethod
    def of(cls, level: int) -> "Brightness":
        """Create a brightness from its level."""
        return cls(level=level)

    @classmethod
    def minimum(cls) -> "Brightness":
        return cls(level=cls.MIN_VALUE)

    @classmethod
    def maximum(cls) -> "Brightness":
        return cls(level=cls.MAX_VALUE)

    def more(self) -> "Brightness":
        """Get the next brighter level, or this one if already at maximum."""
        return Brightness(level=self.level + 1) if self.level < self.MAX_VALUE else self

    def less(self) -> "Brightness":
        """Get the next dimmer level, or this one if already at minimum."""
        return Brightness(level=self.level - 1) if self.level > self.MIN_VALUE else self


class ScrollSpeed(BaseModel):
    """Text scrolling speed (1 = slowest, 7 = fastest)."""

    model_config = ConfigDict(frozen=True)

    MIN_VALUE: ClassVar[int] = 1
    MAX_VALUE: ClassVar[int] = 7

    speed: int = Field(ge=1, le=7, description="Scrolling speed (1-7)")

    @classmethod
    def of(cls, speed: int) -> "ScrollSpeed":
        return cls(speed=speed)
