from typing import Optional


class GeneratorException(Exception):
    def __init__(self, location: Optional[str], message: str):
        super().__init__(message)
        self.location = location
        self.message = message

    def __str__(self) -> str:
        if self.location is not None:
            return f"{self.location}: {self.message}"
        return self.message


class MalformedDataset(GeneratorException):
    pass


class UnrecognizedFlagSymbol(GeneratorException):
    def __init__(self, location: Optional[str], flag: str, symbol):
        super().__init__(location, f"unrecognized symbol {symbol!r} for flag {flag}")
        self.flag = flag
        self.symbol = symbol
