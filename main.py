from typing import Any, Dict, List
import json
import sys
from exception import GeneratorException, MalformedDataset
from instruction import Opcode
import zig


TABLES = ("cbprefixed", "unprefixed")


def load_dataset(filename: str) -> Dict[str, Any]:
    print(f"Processing file: {filename}", file=sys.stderr)
    try:
        with open(filename, "rt", encoding="utf-8") as f:
            dataset = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedDataset(filename, f"invalid JSON: {e}")
    except UnicodeDecodeError as e:
        raise MalformedDataset(filename, f"invalid UTF-8 text: {e}")
    if not isinstance(dataset, dict):
        raise MalformedDataset(filename, "top level of the dataset must be an object")
    return dataset


class Generator:
    def __init__(self, dataset: Dict[str, Any], table: str = "cbprefixed"):
        if not isinstance(dataset, dict):
            raise MalformedDataset(None, "dataset must be an object")
        entries = dataset.get(table)
        if not isinstance(entries, dict):
            raise MalformedDataset(table, "opcode table missing or not an object")
        self.table = table
        self.__entries = entries

    def generate(self) -> List[Opcode]:
        # Everything is converted before any text is produced, so a bad entry
        # never leaves a half written table behind.
        opcodes = [Opcode.from_json(code, raw) for code, raw in self.__entries.items()]
        print(f"Generated {len(opcodes)} opcodes from {self.table}", file=sys.stderr)
        return opcodes

    def render(self, *, declarations: bool = False) -> str:
        opcodes = self.generate()
        if declarations:
            return zig.render_declarations(self.table, opcodes)
        return zig.render_literals(opcodes)


def main():
    import argparse
    parser = argparse.ArgumentParser(description="Generate Zig opcode descriptors from an SM83 opcode table")
    parser.add_argument("input")
    parser.add_argument("--output")
    parser.add_argument("--table", choices=TABLES, default="cbprefixed")
    parser.add_argument("--declarations", action="store_true")

    args = parser.parse_args()

    try:
        g = Generator(load_dataset(args.input), args.table)
        result = g.render(declarations=args.declarations)
        if args.output:
            with open(args.output, "wt", encoding="utf-8") as f:
                f.write(result)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except GeneratorException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.location:
            print(f" at: {e.location}", file=sys.stderr)
        sys.exit(1)
    else:
        if not args.output:
            sys.stdout.write(result)


if __name__ == "__main__":
    main()
