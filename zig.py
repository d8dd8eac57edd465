import re
import textwrap
from typing import List
from instruction import FlagBehavior, Opcode, operand_identifier


IDENTIFIER_REGEX = re.compile(r'[A-Za-z_][A-Za-z0-9_]*\Z')

FLAG_TAGS = {
    FlagBehavior.UNAFFECTED: "__",
    FlagBehavior.CLEARED: "_0",
    FlagBehavior.SET: "_1",
    FlagBehavior.DATA_DEPENDENT: "self",
}

PRELUDE = """pub const FlagBehavior = enum { __, _0, _1, self };

pub const FlagBehaviors = struct {
    z: FlagBehavior,
    n: FlagBehavior,
    h: FlagBehavior,
    c: FlagBehavior,
};

pub const Operand = struct {
    name: OperandName,
    immediate: bool,
    bytes: ?u8 = null,
    increment: ?bool = null,
    decrement: ?bool = null,
};

pub const Opcode = struct {
    mnemonic: Mnemonic,
    bytes: u8,
    cycles: []const u5,
    operands: []const Operand,
    immediate: bool,
    flags: FlagBehaviors,
};
"""


def identifier(name: str) -> str:
    ident = operand_identifier(name)
    if IDENTIFIER_REGEX.match(ident):
        return ident
    # RST targets like "$08" need the quoted form.
    return '@"' + name.replace('\\', '\\\\').replace('"', '\\"') + '"'


def value(v) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


def render_opcode(opcode: Opcode) -> str:
    lines = [
        f"// {opcode.code}",
        "Opcode{",
        f"    .mnemonic = Mnemonic.{identifier(opcode.mnemonic)},",
        f"    .bytes = {opcode.bytes},",
        f"    .cycles = &[_]u5{{ {', '.join(str(c) for c in opcode.cycles)} }},",
    ]
    if opcode.operands:
        lines.append("    .operands = &[_]Operand{")
        for operand in opcode.operands:
            lines.append("        Operand{")
            lines.append(f"            .name = OperandName.{identifier(operand.name)},")
            lines.append(f"            .immediate = {value(operand.immediate)},")
            for key, attr in operand.attributes():
                lines.append(f"            .{key} = {value(attr)},")
            lines.append("        },")
        lines.append("    },")
    else:
        lines.append("    .operands = &[_]Operand{},")
    lines.append(f"    .immediate = {value(opcode.immediate)},")
    lines.append("    .flags = FlagBehaviors{")
    for flag, behavior in opcode.flags:
        lines.append(f"        .{flag} = FlagBehavior.{FLAG_TAGS[behavior]},")
    lines.append("    },")
    lines.append("},")
    return "\n".join(lines)


def render_enum(name: str, members: List[str]) -> str:
    body = "".join(f"    {identifier(member)},\n" for member in members)
    return f"pub const {name} = enum {{\n{body}}};\n"


def render_declarations(table: str, opcodes: List[Opcode]) -> str:
    mnemonics: List[str] = []
    operand_names: List[str] = []
    for opcode in opcodes:
        if opcode.mnemonic not in mnemonics:
            mnemonics.append(opcode.mnemonic)
        for operand in opcode.operands:
            if operand.name not in operand_names:
                operand_names.append(operand.name)

    body = "\n".join(render_opcode(opcode) for opcode in opcodes)
    return "\n".join([
        PRELUDE,
        render_enum("Mnemonic", mnemonics),
        render_enum("OperandName", operand_names),
        f"pub const {identifier(table)} = [_]Opcode{{",
        textwrap.indent(body, "    "),
        "};",
        "",
    ])


def render_literals(opcodes: List[Opcode]) -> str:
    return "".join(f"{render_opcode(opcode)}\n" for opcode in opcodes)
