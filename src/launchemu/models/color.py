"""Color model for the bi-color (red/green) LED grid."""

from pydantic import BaseModel, ConfigDict, Field

MIN_INTENSITY = 0
MAX_INTENSITY = 3

# Concrete display colors, indexed [red][green]
PALETTE: tuple[tuple[str, ...], ...] = (
    ("#CCC", "#060", "#0C2", "#0F4"),
    ("#600", "#660", "#6C2", "#6F4"),
    ("#C00", "#C60", "#CC2", "#CF4"),
    ("#F00", "#F60", "#FC2", "#FF4"),
)

OFF_COLOR = PALETTE[0][0]


class Color(BaseModel):
    """Red/green intensity pair.

    Each LED mixes a red and a green element, each with four intensity
    steps (0-3). The pair indexes the fixed display palette; (0, 0) is
    the "off" color.

    The model is frozen so colors are hashable and can be shared between
    buffers without copying. Intensities are never coerced from strings,
    floats or booleans.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    r: int = Field(
        strict=True, ge=MIN_INTENSITY, le=MAX_INTENSITY, description="Red intensity (0-3)"
    )
    g: int = Field(
        strict=True, ge=MIN_INTENSITY, le=MAX_INTENSITY, description="Green intensity (0-3)"
    )

    @classmethod
    def of(cls, red: int, green: int) -> "Color":
        """Create a color from red and green intensities."""
        return cls(r=red, g=green)

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0)

    @property
    def is_off(self) -> bool:
        """Check if this color renders as the off color."""
        return self.to_hex() == OFF_COLOR

    def to_hex(self) -> str:
        """Look up the CSS hex color for this intensity pair.

        Example:
            >>> Color(r=3, g=0).to_hex()
            '#F00'
        """
        return PALETTE[self.r][self.g]


# Most used colors
BLACK = Color(r=0, g=0)
RED = Color(r=3, g=0)
GREEN = Color(r=0, g=3)
ORANGE = Color(r=3, g=2)
AMBER = Color(r=3, g=3)
YELLOW = Color(r=2, g=3)
