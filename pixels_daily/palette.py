from pydantic import BaseModel, ConfigDict

OPAQUE = 0xFF


class Color(BaseModel):
    model_config = ConfigDict(frozen=True)

    hex: str
    r: int
    g: int
    b: int
    name: str


class ColorPalette(BaseModel):
    """Lookup table from a small color index to an RGB triple."""

    model_config = ConfigDict(frozen=True)

    colors: tuple[Color, ...]

    def __len__(self) -> int:
        return len(self.colors)

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self.colors)

    def rgb(self, index: int) -> tuple[int, int, int]:
        if not self.is_valid(index):
            raise IndexError(f"Color index {index} outside palette of {len(self.colors)}")
        color = self.colors[index]
        return color.r, color.g, color.b

    def rgba(self, index: int) -> tuple[int, int, int, int]:
        return (*self.rgb(index), OPAQUE)


def _color(hex_code: str, name: str) -> Color:
    value = int(hex_code[1:], 16)
    return Color(hex=hex_code, r=value >> 16, g=(value >> 8) & 0xFF, b=value & 0xFF, name=name)


# PICO-8 palette used by the Pixels contract
DEFAULT_PALETTE = ColorPalette(colors=(
    _color('#000000', 'Black'),
    _color('#1D2B53', 'Dark Blue'),
    _color('#7E2553', 'Dark Purple'),
    _color('#008751', 'Dark Green'),
    _color('#AB5236', 'Brown'),
    _color('#5F574F', 'Dark Grey'),
    _color('#C2C3C7', 'Light Grey'),
    _color('#FFF1E8', 'White'),
    _color('#FF004D', 'Red'),
    _color('#FFA300', 'Orange'),
    _color('#FFEC27', 'Yellow'),
    _color('#00E436', 'Green'),
    _color('#29ADFF', 'Blue'),
    _color('#83769C', 'Lavender'),
    _color('#FF77A8', 'Pink'),
    _color('#FFCCAA', 'Light Peach'),
))
