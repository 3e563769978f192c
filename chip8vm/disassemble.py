"""CHIP-8 mnemonics for instruction traces."""

from chip8vm.decode import decode

ALU_MNEMONICS = {
    0x0: "LD V{x:X}, V{y:X}",
    0x1: "OR V{x:X}, V{y:X}",
    0x2: "AND V{x:X}, V{y:X}",
    0x3: "XOR V{x:X}, V{y:X}",
    0x4: "ADD V{x:X}, V{y:X}",
    0x5: "SUB V{x:X}, V{y:X}",
    0x6: "SHR V{x:X}",
    0x7: "SUBN V{x:X}, V{y:X}",
    0xE: "SHL V{x:X}",
}

MISC_MNEMONICS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}

FAMILY_MNEMONICS = {
    0x1: "JP 0x{nnn:03X}",
    0x2: "CALL 0x{nnn:03X}",
    0x3: "SE V{x:X}, 0x{nn:02X}",
    0x4: "SNE V{x:X}, 0x{nn:02X}",
    0x6: "LD V{x:X}, 0x{nn:02X}",
    0x7: "ADD V{x:X}, 0x{nn:02X}",
    0xA: "LD I, 0x{nnn:03X}",
    0xB: "JP V0, 0x{nnn:03X}",
    0xC: "RND V{x:X}, 0x{nn:02X}",
    0xD: "DRW V{x:X}, V{y:X}, {n}",
}

UNKNOWN = "???"


def disassemble(instruction: int) -> str:
    """Return an assembler-style mnemonic, or ``"???"`` for unknown words."""
    inst = decode(instruction)
    fields = dict(x=inst.x, y=inst.y, n=inst.n, nn=inst.nn, nnn=inst.nnn)

    if inst.opcode == 0x0:
        template = {0x00E0: "CLS", 0x00EE: "RET"}.get(inst.raw)
    elif inst.opcode in (0x5, 0x9):
        template = None if inst.n else ("SE" if inst.opcode == 0x5 else "SNE") + " V{x:X}, V{y:X}"
    elif inst.opcode == 0x8:
        template = ALU_MNEMONICS.get(inst.n)
    elif inst.opcode == 0xE:
        template = {0x9E: "SKP V{x:X}", 0xA1: "SKNP V{x:X}"}.get(inst.nn)
    elif inst.opcode == 0xF:
        template = MISC_MNEMONICS.get(inst.nn)
    else:
        template = FAMILY_MNEMONICS[inst.opcode]

    return template.format(**fields) if template else UNKNOWN
