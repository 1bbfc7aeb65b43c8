"""Exception hierarchy for card_proxy."""


class CardProxyError(Exception):
    """Base class for all card_proxy errors."""


class ConfigurationError(CardProxyError):
    """The grid configuration cannot be laid out."""


class InvalidGeometry(ConfigurationError):
    """Computed card geometry would be empty or negative."""


class MalformedRepeatPrefix(CardProxyError):
    """A file name starts with `X` but carries no readable repeat count."""

    def __init__(self, name: str, prefix: str) -> None:
        super().__init__(f"invalid multiplier string {prefix!r} in {name!r}")
        self.name = name
        self.prefix = prefix


class UnsupportedFormat(CardProxyError):
    """A file is not a JPEG or PNG image, by extension or by content."""

    def __init__(self, name: str, format_name: str) -> None:
        super().__init__(f"unsupported image format {format_name!r} for {name!r}")
        self.name = name
        self.format_name = format_name
