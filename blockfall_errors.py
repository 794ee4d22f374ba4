"""Error taxonomy for the engine"""


class BlockfallError(Exception):
    """Base class for every error raised by the engine."""


class InvalidDimension(BlockfallError, ValueError):
    """Grid construction with a non-positive width or height."""


class InvalidConfig(BlockfallError, ValueError):
    """Session configuration with a bad interval or an unknown key."""


class UnknownPieceKey(BlockfallError, KeyError):
    """Catalog lookup outside the fixed piece alphabet.

    Only a broken key generator can trigger this, so it is never recovered.
    """

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"unknown piece key: {self.key!r}"
