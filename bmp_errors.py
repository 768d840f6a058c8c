### BMP processing exception classes ###
class BMPError(Exception):
    """Base class for BMP processing exceptions."""
    pass


class BMPFormatError(BMPError, ValueError):
    """Raised when the file is not a BMP the parser can read."""
    pass


class InvalidImageError(BMPError, ValueError):
    """Pixel grid is empty or its rows have different lengths"""
    pass


class InvalidParameterError(BMPError, ValueError):
    """Raised when a transform gets a parameter it cannot use."""
    def __init__(self, name, value, message=""):
        self.name = name
        self.value = value
        self.message = message or f"Invalid value for {name}: {value!r}"
        super().__init__(self.message)


class UnknownOperationError(BMPError, KeyError):
    """No operation is registered under the given id"""
    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Unknown operation: {identifier!r}")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]
