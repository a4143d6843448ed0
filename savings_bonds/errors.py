"""
Exception types raised by the savings bonds toolkit.
"""


class BondError(Exception):
    """Base class for all savings bonds errors."""


class InvalidDataReturned(BondError):
    """The response page did not contain the expected bond data row."""

    def __init__(self, message: str = "invalid data returned from server", values=None):
        super().__init__(message)
        self.values = list(values) if values is not None else None


class MalformedCellError(InvalidDataReturned):
    """A table cell (or its emphasis/link element) had no content to read."""


class NumericParseError(BondError, ValueError):
    """A currency field could not be parsed as a number."""

    def __init__(self, field: str, text: str):
        super().__init__(f"could not parse {field} value {text!r} as a number")
        self.field = field
        self.text = text


class FetchError(BondError):
    """The bond calculator request failed."""


class ConfigError(BondError):
    """Base class for configuration errors."""


class ConfigFileNotFound(ConfigError):
    def __init__(self, path: str):
        super().__init__(f"configuration file not found: {path}")
        self.path = path


class ConfigIsNil(ConfigError):
    def __init__(self):
        super().__init__("configuration is empty")


class NoBondsInConfig(ConfigError):
    def __init__(self):
        super().__init__("no bonds found in the configuration")


class ConfigNotInt(ConfigError):
    def __init__(self, index: int):
        super().__init__(f"bond {index}: denomination is expected to be an int value")
        self.index = index


class ConfigNotString(ConfigError):
    def __init__(self, index: int, field: str):
        super().__init__(
            f"bond {index}: {field} is expected to be a string value "
            "(serial, issue_date and series must be strings)"
        )
        self.index = index
        self.field = field


class ConfigIncomplete(ConfigError):
    def __init__(self, index: int, field: str):
        super().__init__(f"bond {index}: full configuration not provided ({field} missing or invalid)")
        self.index = index
        self.field = field
