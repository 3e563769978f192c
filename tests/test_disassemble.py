"""Tests for instruction mnemonics."""

import pytest
from chip8vm import disassemble


@pytest.mark.parametrize("instruction, mnemonic", [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1234, "JP 0x234"),
    (0x2ABC, "CALL 0xABC"),
    (0x3A42, "SE VA, 0x42"),
    (0x5120, "SE V1, V2"),
    (0x8124, "ADD V1, V2"),
    (0x812E, "SHL V1"),
    (0x9AB0, "SNE VA, VB"),
    (0xB300, "JP V0, 0x300"),
    (0xD125, "DRW V1, V2, 5"),
    (0xE59E, "SKP V5"),
    (0xF30A, "LD V3, K"),
    (0xF765, "LD V7, [I]"),
])
def test_known_instructions(instruction, mnemonic):
    assert disassemble(instruction) == mnemonic


@pytest.mark.parametrize("instruction", [0x0123, 0x5121, 0x8128, 0xE000, 0xF0FF])
def test_unknown_instructions(instruction):
    assert disassemble(instruction) == "???"
