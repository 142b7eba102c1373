from enum import IntEnum


class FrameType(IntEnum):
    """Selects the CEL decoding algorithm of a level frame.

    Decoders are keyed by these values; a level CEL frame is decoded by
    exactly one of them.
    """

    TYPE0 = 0  # plain 32x32, no transparency
    TYPE1 = 1  # run-length encoded, transparent pixels
    TYPE2 = 2  # left triangle
    TYPE3 = 3  # right triangle
    TYPE4 = 4  # left trapezoid
    TYPE5 = 5  # right trapezoid
    TYPE6 = 6
