from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from exception import MalformedDataset, UnrecognizedFlagSymbol


FLAGS = ("Z", "N", "H", "C")


class FlagBehavior(Enum):
    UNAFFECTED = "unaffected"
    CLEARED = "cleared"
    SET = "set"
    DATA_DEPENDENT = "dataDependent"


def flag_behavior(flag: str, symbol: Any, location: Optional[str] = None) -> FlagBehavior:
    """Translate one raw flag symbol from the table.

    `-` leaves the flag alone, `0`/`1` force it, and the flag's own letter
    means the value is computed from the result. Any other symbol, including
    the letter of a different flag, is an error.
    """
    if symbol == "-":
        return FlagBehavior.UNAFFECTED
    if symbol == "0":
        return FlagBehavior.CLEARED
    if symbol == "1":
        return FlagBehavior.SET
    if symbol == flag:
        return FlagBehavior.DATA_DEPENDENT
    raise UnrecognizedFlagSymbol(location, flag, symbol)


def operand_identifier(name: str) -> str:
    # Identifiers can't start with a digit, bit indexes like "0" become "_0".
    if name[:1].isdigit():
        return f"_{name}"
    return name


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _field(raw: Dict[str, Any], key: str, location: Optional[str]) -> Any:
    if not isinstance(raw, dict):
        raise MalformedDataset(location, f"expected an object, got {type(raw).__name__}")
    if key not in raw or raw[key] is None:
        raise MalformedDataset(location, f"missing field '{key}'")
    return raw[key]


@dataclass(frozen=True)
class FlagBehaviors:
    z: FlagBehavior
    n: FlagBehavior
    h: FlagBehavior
    c: FlagBehavior

    @staticmethod
    def from_json(flags: Dict[str, Any], location: Optional[str] = None) -> "FlagBehaviors":
        return FlagBehaviors(*(flag_behavior(flag, _field(flags, flag, location), location) for flag in FLAGS))

    def __iter__(self):
        yield "z", self.z
        yield "n", self.n
        yield "h", self.h
        yield "c", self.c


@dataclass(frozen=True)
class Operand:
    name: str
    immediate: bool
    bytes: Optional[int] = None
    increment: Optional[bool] = None
    decrement: Optional[bool] = None

    @property
    def identifier(self) -> str:
        return operand_identifier(self.name)

    def attributes(self) -> List[tuple]:
        """Optional attributes that are present, in output order."""
        result = []
        for key in ("bytes", "increment", "decrement"):
            value = getattr(self, key)
            if value is not None:
                result.append((key, value))
        return result

    @staticmethod
    def from_json(raw: Dict[str, Any], location: Optional[str] = None) -> "Operand":
        name = _field(raw, "name", location)
        if not isinstance(name, str) or not name:
            raise MalformedDataset(location, f"operand name must be a non-empty string, got {name!r}")
        immediate = _field(raw, "immediate", location)
        if not isinstance(immediate, bool):
            raise MalformedDataset(location, f"operand '{name}' field 'immediate' must be a boolean")

        size = raw.get("bytes")
        if size is not None and (not _is_int(size) or size < 1):
            raise MalformedDataset(location, f"operand '{name}' field 'bytes' must be a positive integer")
        for key in ("increment", "decrement"):
            if raw.get(key) is not None and not isinstance(raw[key], bool):
                raise MalformedDataset(location, f"operand '{name}' field '{key}' must be a boolean")
        return Operand(name, immediate, size, raw.get("increment"), raw.get("decrement"))


@dataclass(frozen=True)
class Opcode:
    code: str
    mnemonic: str
    bytes: int
    cycles: Tuple[int, ...]
    operands: Tuple[Operand, ...]
    immediate: bool
    flags: FlagBehaviors

    @staticmethod
    def from_json(code: str, raw: Dict[str, Any]) -> "Opcode":
        mnemonic = _field(raw, "mnemonic", code)
        if not isinstance(mnemonic, str) or not mnemonic:
            raise MalformedDataset(code, f"mnemonic must be a non-empty string, got {mnemonic!r}")

        size = _field(raw, "bytes", code)
        if not _is_int(size) or size < 1:
            raise MalformedDataset(code, f"bytes must be a positive integer, got {size!r}")

        cycles = _field(raw, "cycles", code)
        if not isinstance(cycles, list) or len(cycles) not in (1, 2):
            raise MalformedDataset(code, f"cycles must be a list of one or two counts, got {cycles!r}")
        for count in cycles:
            if not _is_int(count) or count < 0:
                raise MalformedDataset(code, f"invalid cycle count {count!r}")

        operands = _field(raw, "operands", code)
        if not isinstance(operands, list):
            raise MalformedDataset(code, "operands must be a list")

        immediate = _field(raw, "immediate", code)
        if not isinstance(immediate, bool):
            raise MalformedDataset(code, "immediate must be a boolean")

        return Opcode(
            code=code,
            mnemonic=mnemonic,
            bytes=size,
            cycles=tuple(cycles),
            operands=tuple(Operand.from_json(operand, code) for operand in operands),
            immediate=immediate,
            flags=FlagBehaviors.from_json(_field(raw, "flags", code), code),
        )
