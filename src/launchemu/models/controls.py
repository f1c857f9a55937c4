"""Physical controls: square grid pads and round edge buttons."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

GRID_SIZE = 8  # 8x8 pads
BUTTON_COUNT = 8  # per edge


class Pad(BaseModel):
    """A square pad of the 8x8 grid, (0, 0) being the top-left pad."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=0, lt=GRID_SIZE, description="X coordinate (0-7)")
    y: int = Field(ge=0, lt=GRID_SIZE, description="Y coordinate (0-7)")

    @classmethod
    def at(cls, x: int, y: int) -> "Pad":
        """Get the pad at the given coordinates."""
        return cls(x=x, y=y)

    @property
    def position(self) -> tuple[int, int]:
        """Get (x, y) position as tuple."""
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"Pad[{self.x},{self.y}]"


class Button(Enum):
    """Round buttons along the top row and the right side."""

    # Top row, left to right
    UP = (0, True)
    DOWN = (1, True)
    LEFT = (2, True)
    RIGHT = (3, True)
    SESSION = (4, True)
    USER_1 = (5, True)
    USER_2 = (6, True)
    MIXER = (7, True)

    # Right side, top to bottom
    VOL = (0, False)
    PAN = (1, False)
    SND_A = (2, False)
    SND_B = (3, False)
    STOP = (4, False)
    TRACK_ON = (5, False)
    SOLO = (6, False)
    ARM = (7, False)

    @property
    def coordinate(self) -> int:
        """Position of the button along its edge (0-7)."""
        return self.value[0]

    @property
    def is_top(self) -> bool:
        """True for top-row buttons, False for right-side buttons."""
        return self.value[1]

    @property
    def is_right(self) -> bool:
        return not self.value[1]

    @classmethod
    def at(cls, is_top: bool, coordinate: int) -> "Button":
        """
        Get a button by edge and position.

        Raises:
            ValueError: If the coordinate is outside 0-7
        """
        if not 0 <= coordinate < BUTTON_COUNT:
            raise ValueError(
                f"Invalid button coordinate: {coordinate}. "
                f"Must be between 0 and {BUTTON_COUNT - 1} inclusive."
            )
        return cls((coordinate, is_top))

    @classmethod
    def at_top(cls, coordinate: int) -> "Button":
        return cls.at(True, coordinate)

    @classmethod
    def at_right(cls, coordinate: int) -> "Button":
        return cls.at(False, coordinate)

    def __str__(self) -> str:
        edge = "top" if self.is_top else "right"
        return f"Button[{self.name}({edge},{self.coordinate})]"
