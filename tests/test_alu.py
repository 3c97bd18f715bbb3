"""Tests for ALU operations (8xxx)."""

import pytest
from chip8vm import execute


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x42))
        state = state.replace(V=state.V.at[2].set(0x99))

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xF0))
        state = state.replace(V=state.V.at[2].set(0x0F))

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xF0))
        state = state.replace(V=state.V.at[2].set(0xF1))

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_same(self, fresh_state):
        """8XY3 - XOR with same value should be 0."""
        state = fresh_state
        state = state.replace(V=state.V.at[3].set(0xAA))
        state = state.replace(V=state.V.at[4].set(0xAA))

        state = execute(state, 0x8343)  # V3 ^= V4

        assert state.V[3] == 0x00

    def test_logic_ops_leave_vf_alone(self, fresh_state):
        """8XY0-8XY3 do not touch VF."""
        for low in (0x0, 0x1, 0x2, 0x3):
            state = fresh_state.replace(V=fresh_state.V.at[15].set(0x77))
            state = execute(state, 0x8120 | low)
            assert state.V[15] == 0x77, f"8XY{low:X} modified VF"


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x10))
        state = state.replace(V=state.V.at[2].set(0x20))

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - Add with carry."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xFF))
        state = state.replace(V=state.V.at[2].set(0x01))

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x00  # 256 wraps to 0
        assert state.V[15] == 1  # Carry set

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x30))
        state = state.replace(V=state.V.at[2].set(0x10))

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0x20
        assert state.V[15] == 1  # No borrow (VX >= VY)

    def test_alu_sub_xy_equal_operands(self, fresh_state):
        """8XY5 - Equal operands give zero and no borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x42))
        state = state.replace(V=state.V.at[2].set(0x42))

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, with borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[3].set(0x10))
        state = state.replace(V=state.V.at[4].set(0x30))

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == 0xE0  # 16 - 48 = -32 → 224
        assert state.V[15] == 0  # Borrow (VX < VY)

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x10))
        state = state.replace(V=state.V.at[2].set(0x30))

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20  # 48 - 16 = 32
        assert state.V[15] == 1  # No borrow (VY >= VX)

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, with borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x30))
        state = state.replace(V=state.V.at[2].set(0x10))

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0xE0
        assert state.V[15] == 0

    @pytest.mark.parametrize("vx,vy", [(0, 0), (1, 255), (200, 100), (255, 255), (17, 239)])
    def test_add_sub_wrap_modulo_256(self, fresh_state, vx, vy):
        """8XY4/8XY5 results wrap and VF reflects carry/borrow."""
        state = fresh_state.replace(V=fresh_state.V.at[1].set(vx).at[2].set(vy))

        added = execute(state, 0x8124)
        assert added.V[1] == (vx + vy) % 256
        assert added.V[15] == (1 if vx + vy > 255 else 0)

        subtracted = execute(state, 0x8125)
        assert subtracted.V[1] == (vx - vy) % 256
        assert subtracted.V[15] == (0 if vx < vy else 1)


class TestALUShifts:
    """Test shift operations with quirk differences."""

    def test_shift_right_modern_even(self, modern_state):
        """8XY6 - Shift right, modern mode, even number."""
        state = modern_state.replace(V=modern_state.V.at[1].set(0x04))
        state = state.replace(V=state.V.at[2].set(0xFF))  # Should be ignored

        state = execute(state, 0x8126)  # V1 >>= 1

        assert state.V[1] == 0x02  # 4 >> 1 = 2
        assert state.V[15] == 0  # LSB was 0

    def test_shift_right_modern_odd(self, modern_state):
        """8XY6 - Shift right, modern mode, odd number."""
        state = modern_state.replace(V=modern_state.V.at[3].set(0x05))
        state = state.replace(V=state.V.at[4].set(0xFF))  # Should be ignored

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02  # 5 >> 1 = 2
        assert state.V[15] == 1  # LSB was 1

    def test_shift_right_cosmac(self, cosmac_state):
        """8XY6 - Shift right, COSMAC mode uses VY."""
        state = cosmac_state.replace(V=cosmac_state.V.at[5].set(0x08))  # Should be ignored
        state = state.replace(V=state.V.at[6].set(0x03))  # 00000011

        state = execute(state, 0x8566)  # V5 = V6 >> 1

        assert state.V[5] == 0x01  # V6 (3) >> 1 = 1
        assert state.V[6] == 0x03  # Source unchanged
        assert state.V[15] == 1  # LSB of V6 was 1

    def test_shift_left_modern_overflow(self, modern_state):
        """8XYE - Shift left, modern mode, with overflow."""
        state = modern_state.replace(V=modern_state.V.at[3].set(0x81))  # 10000001
        state = state.replace(V=state.V.at[4].set(0xFF))  # Should be ignored

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02  # 129 << 1 = 258 → 2
        assert state.V[15] == 1  # MSB was 1

    def test_shift_left_cosmac(self, cosmac_state):
        """8XYE - Shift left, COSMAC mode uses VY."""
        state = cosmac_state.replace(V=cosmac_state.V.at[1].set(0xFF))
        state = state.replace(V=state.V.at[2].set(0x41))

        state = execute(state, 0x812E)

        assert state.V[1] == 0x82
        assert state.V[15] == 0

    def test_shift_mode_comparison(self):
        """Test that the shift quirk correctly switches behaviors."""
        from chip8vm import create_state, Quirks

        # Modern: V1 = V1 >> 1 (ignores V2)
        state_modern = create_state(quirks=Quirks(shift_uses_vy=False))
        state_modern = state_modern.replace(V=state_modern.V.at[1].set(0x08))  # V1 = 8
        state_modern = state_modern.replace(V=state_modern.V.at[2].set(0x03))  # V2 = 3
        state_modern = execute(state_modern, 0x8126)

        # COSMAC: V1 = V2 >> 1 (uses V2)
        state_cosmac = create_state(quirks=Quirks(shift_uses_vy=True))
        state_cosmac = state_cosmac.replace(V=state_cosmac.V.at[1].set(0x08))  # V1 = 8
        state_cosmac = state_cosmac.replace(V=state_cosmac.V.at[2].set(0x03))  # V2 = 3
        state_cosmac = execute(state_cosmac, 0x8126)

        assert state_modern.V[1] == 0x04  # 8 >> 1 = 4 (used V1)
        assert state_cosmac.V[1] == 0x01  # 3 >> 1 = 1 (used V2)


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0xAA))

        # V5 ^= V5 (should become 0)
        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        # Reset and test self ADD
        state = state.replace(V=state.V.at[5].set(0x80))
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_register_operations(self, fresh_state):
        """Test that operations on VF work correctly."""
        state = fresh_state
        state = state.replace(V=state.V.at[15].set(0x42))  # VF = 0x42
        state = state.replace(V=state.V.at[1].set(0x10))

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"

    def test_flag_wins_when_destination_is_vf(self, fresh_state):
        """8FY4 - Flag is written after the result."""
        state = fresh_state.replace(V=fresh_state.V.at[15].set(0xFF).at[1].set(0x02))

        state = execute(state, 0x8F14)

        assert state.V[15] == 1
