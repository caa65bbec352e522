class ColorPickerError(Exception):
    """Base class for failures reported back to the user as text."""


class DecodeError(ColorPickerError):
    """Input bytes are empty, malformed or in an unsupported format."""


class OutOfBoundsError(ColorPickerError):
    """A click landed outside the rendered image."""


class DegenerateImageError(ColorPickerError):
    """The image has zero width or height."""
