"""Tests for the keypad and key-skip instructions."""

import pytest
from chip8vm import execute, InvalidKeyIndexError, UnrecognizedOpcodeError
from chip8vm.keypad import create_keypad, set_key_state, is_pressed, pressed_key, release_all


class TestKeypad:
    """Test the keypad component."""

    def test_all_released(self):
        keypad = create_keypad()
        assert not any(is_pressed(keypad, i) for i in range(16))
        assert pressed_key(keypad) is None

    def test_set_and_release(self):
        keypad = set_key_state(create_keypad(), 0xA, True)
        assert is_pressed(keypad, 0xA)
        assert pressed_key(keypad) == 0xA

        keypad = set_key_state(keypad, 0xA, False)
        assert not is_pressed(keypad, 0xA)

    @pytest.mark.parametrize("index", [-1, 16, 255])
    def test_invalid_index(self, index):
        keypad = create_keypad()
        with pytest.raises(InvalidKeyIndexError) as excinfo:
            set_key_state(keypad, index, True)
        assert excinfo.value.index == index

    @pytest.mark.parametrize("index", [0, 15])
    def test_boundary_indices(self, index):
        assert is_pressed(set_key_state(create_keypad(), index, True), index)

    def test_release_all(self):
        keypad = set_key_state(set_key_state(create_keypad(), 1, True), 2, True)
        assert pressed_key(release_all(keypad)) is None


class TestKeySkips:
    """Test EX9E and EXA1."""

    def test_skip_if_key_pressed(self, fresh_state):
        state = execute(fresh_state, 0x6005)  # V0 = 5
        state = state.replace(keypad=set_key_state(state.keypad, 5, True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 4

    def test_no_skip_if_key_released(self, fresh_state):
        state = execute(fresh_state, 0x6005)
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 2

    def test_skip_if_key_not_pressed(self, fresh_state):
        state = execute(fresh_state, 0x6005)
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc + 4

    def test_no_skip_if_key_not_pressed_but_is(self, fresh_state):
        state = execute(fresh_state, 0x6005)
        state = state.replace(keypad=set_key_state(state.keypad, 5, True))
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc + 2

    def test_key_register_out_of_range(self, fresh_state):
        state = execute(fresh_state, 0x6010)  # V0 = 16
        with pytest.raises(InvalidKeyIndexError):
            execute(state, 0xE09E)

    def test_unknown_key_instruction(self, fresh_state):
        with pytest.raises(UnrecognizedOpcodeError):
            execute(fresh_state, 0xE09F)
