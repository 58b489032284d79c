"""A basic AArch64 CPU with a single-cycle, MIPS-style datapath."""

from __future__ import annotations

import enum
from typing import Any, Optional, Tuple

from armsim.bits import (
    double_as_uint64,
    float_as_uint64_low,
    uint64_as_double,
    uint64_low_as_float,
)
from armsim.controls import (
    CPU,
    ALUControl,
    CPUError,
    FPOp,
    MEMControl,
    UnimplementedInstructionError,
    WBControl,
)

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_GENERAL_REGISTERS = 31
_FLOAT_REGISTERS = 32
_ZERO_REGISTER = 31


class _Bank(enum.Enum):
    GENERAL = enum.auto()
    FLOAT = enum.auto()
    SP = enum.auto()
    ZERO = enum.auto()


_Destination = Tuple[_Bank, int]


class BasicCPU(CPU):
    """A CPU running a limited subset of the A64 instruction set.

    Each machine cycle goes through the stages fetch, decode, execute
    (integer or floating point), memory access and write-back. The
    auxiliary registers between stages are plain attributes.
    """

    def __init__(self, memory: Any) -> None:
        super().__init__(memory)
        self.pc = 0
        self.sp = 0
        self.r = [0] * _GENERAL_REGISTERS
        self.v = [0] * _FLOAT_REGISTERS

        self.ir = 0
        self.a = 0
        self.b = 0
        self.alu_ctrl = ALUControl.ALU_UNDEF
        self.fp_op = FPOp.FP_UNDEF
        self.mem_ctrl = MEMControl.MEM_UNDEF
        self.wb_ctrl = WBControl.WB_UNDEF
        self.mem_to_reg = False
        self.alu_out = 0
        self.mdr = 0
        self.n_flag = self.z_flag = self.c_flag = self.v_flag = False

        self._rd: Optional[_Destination] = None
        self._result_mask = _MASK64

    # ------------------------------------------------------------------
    # Machine cycle
    # ------------------------------------------------------------------

    def run(self, start_address: int) -> int:
        """Execute from ``start_address`` until the process finishes.

        Unimplemented instructions raise UnimplementedInstructionError.
        """
        self.pc = start_address
        while not self.process_finished:
            self.fetch()
            self.decode()
            if self.fp_op is FPOp.FP_UNDEF:
                self.execute_integer()
            else:
                self.execute_float()
            self.memory_access()
            self.write_back()
            self.pc = (self.pc + 4) & _MASK64
        return 0

    def fetch(self) -> None:
        """Read the instruction at PC into IR."""
        self.ir = self.memory.read_instruction32(self.pc) & _MASK32

    def decode(self) -> None:
        """Decode IR, reading operands and setting the control signals."""
        self.fp_op = FPOp.FP_UNDEF
        group = self.ir & 0x1E000000  # bits 28-25
        if group in (0x10000000, 0x12000000):
            self._decode_data_proc_imm()
        elif group in (0x0A000000, 0x1A000000):
            self._decode_data_proc_reg()
        elif group in (0x0E000000, 0x1E000000):
            self._decode_data_proc_float()
        else:
            self._unimplemented()

    def execute_integer(self) -> None:
        """Run the integer ALU on A and B, leaving the result in ALUout."""
        if self.alu_ctrl is ALUControl.SUB:
            result = self.a - self.b
        elif self.alu_ctrl is ALUControl.ADD:
            result = self.a + self.b
        else:
            raise UnimplementedInstructionError(
                f"integer ALU control not implemented: {self.alu_ctrl.name}"
            )
        self.alu_out = result & self._result_mask

    def execute_float(self) -> None:
        """Run the floating point ALU on A and B, leaving the result in ALUout."""
        if self.fp_op is not FPOp.FP_REG_32:
            raise UnimplementedInstructionError(
                f"floating point mode not implemented: {self.fp_op.name}"
            )
        fa = uint64_low_as_float(self.a)
        fb = uint64_low_as_float(self.b)
        if self.alu_ctrl is ALUControl.SUB:
            self.alu_out = float_as_uint64_low(fa - fb)
        elif self.alu_ctrl is ALUControl.ADD:
            self.alu_out = float_as_uint64_low(fa + fb)
        else:
            raise UnimplementedInstructionError(
                f"floating point ALU control not implemented: {self.alu_ctrl.name}"
            )

    def memory_access(self) -> None:
        """Access data memory at ALUout as MEMctrl says."""
        ctrl = self.mem_ctrl
        if ctrl is MEMControl.READ32:
            self.mdr = self.memory.read_data32(self.alu_out) & _MASK32
        elif ctrl is MEMControl.WRITE32:
            self.memory.write_data32(self.alu_out, self.rd_value() & _MASK32)
        elif ctrl is MEMControl.READ64:
            self.mdr = self.memory.read_data64(self.alu_out) & _MASK64
        elif ctrl is MEMControl.WRITE64:
            self.memory.write_data64(self.alu_out, self.rd_value())

    def write_back(self) -> None:
        """Write the result of the instruction to the destination register."""
        if self.wb_ctrl is WBControl.WB_NONE:
            return
        if self.wb_ctrl is not WBControl.RegWrite:
            raise UnimplementedInstructionError(
                f"write-back control not implemented: {self.wb_ctrl.name}"
            )
        self._write_rd(self.mdr if self.mem_to_reg else self.alu_out)

    def reset_flags(self) -> None:
        """Return the control signals to their undefined state."""
        self.alu_ctrl = ALUControl.ALU_UNDEF
        self.fp_op = FPOp.FP_UNDEF
        self.mem_ctrl = MEMControl.MEM_UNDEF
        self.wb_ctrl = WBControl.WB_UNDEF

    def rd_value(self) -> int:
        """Return the current content of the destination register."""
        if self._rd is None:
            raise CPUError("no destination register has been decoded")
        bank, index = self._rd
        if bank is _Bank.GENERAL:
            return self.r[index]
        if bank is _Bank.FLOAT:
            return self.v[index]
        if bank is _Bank.SP:
            return self.sp
        return 0

    # ------------------------------------------------------------------
    # Register file access
    # ------------------------------------------------------------------

    def get_w(self, n: int) -> int:
        """Read the 32-bit integer register Wn."""
        return self.r[n] & _MASK32

    def set_w(self, n: int, value: int) -> None:
        """Write the 32-bit integer register Wn, clearing the upper half."""
        self.r[n] = value & _MASK32

    def get_x(self, n: int) -> int:
        """Read the 64-bit integer register Xn."""
        return self.r[n]

    def set_x(self, n: int, value: int) -> None:
        """Write the 64-bit integer register Xn."""
        self.r[n] = value & _MASK64

    def get_s(self, n: int) -> float:
        """Read the single precision register Sn as a float."""
        return uint64_low_as_float(self.v[n])

    def get_s_bits(self, n: int) -> int:
        """Read the raw 32 bits of the single precision register Sn."""
        return self.v[n] & _MASK32

    def set_s(self, n: int, value: float) -> None:
        """Write the single precision register Sn."""
        self.v[n] = float_as_uint64_low(value)

    def get_d(self, n: int) -> float:
        """Read the double precision register Dn as a float."""
        return uint64_as_double(self.v[n])

    def set_d(self, n: int, value: float) -> None:
        """Write the double precision register Dn."""
        self.v[n] = double_as_uint64(value)

    # ------------------------------------------------------------------
    # Decoders
    # ------------------------------------------------------------------

    def _unimplemented(self) -> None:
        raise UnimplementedInstructionError(
            f"instruction not implemented: 0x{self.ir:08X}"
        )

    def _write_rd(self, value: int) -> None:
        if self._rd is None:
            raise CPUError("no destination register has been decoded")
        bank, index = self._rd
        if bank is _Bank.GENERAL:
            self.r[index] = value & _MASK64
        elif bank is _Bank.FLOAT:
            self.v[index] = value & _MASK64
        elif bank is _Bank.SP:
            self.sp = value & _MASK64

    def _read_w_or_zero(self, n: int) -> int:
        return 0 if n == _ZERO_REGISTER else self.get_w(n)

    def _set_register_write(self) -> None:
        self.mem_ctrl = MEMControl.MEM_NONE
        self.wb_ctrl = WBControl.RegWrite
        self.mem_to_reg = False

    def _decode_data_proc_imm(self) -> None:
        ir = self.ir
        if ir & 0xFF800000 != 0xD1000000:
            self._unimplemented()
        # SUB (immediate), 64-bit variant; shifted immediate not supported.
        if ir & 0x00400000:
            self._unimplemented()

        n = (ir & 0x000003E0) >> 5
        self.a = self.sp if n == 31 else self.get_x(n)
        self.b = (ir & 0x003FFC00) >> 10

        d = ir & 0x0000001F
        self._rd = (_Bank.SP, 0) if d == 31 else (_Bank.GENERAL, d)
        self._result_mask = _MASK64

        self.alu_ctrl = ALUControl.SUB
        self._set_register_write()

    def _decode_data_proc_reg(self) -> None:
        ir = self.ir
        if ir & 0xFF200000 not in (0x8B000000, 0x0B000000):
            self._unimplemented()
        # ADD (shifted register), 32-bit variant only.
        if ir & 0x80000000:
            self._unimplemented()

        n = (ir & 0x000003E0) >> 5
        m = (ir & 0x001F0000) >> 16
        shift = (ir & 0x00C00000) >> 22
        imm6 = (ir & 0x0000FC00) >> 10

        self.a = self._read_w_or_zero(n)
        bw = self._read_w_or_zero(m)
        if shift == 0:  # LSL
            self.b = (bw << imm6) & _MASK32
        elif shift == 1:  # LSR
            self.b = bw >> imm6
        elif shift == 2:  # ASR
            signed = bw - (1 << 32) if bw & 0x80000000 else bw
            self.b = (signed >> imm6) & _MASK32
        else:
            self._unimplemented()

        d = ir & 0x0000001F
        self._rd = (_Bank.ZERO, 0) if d == _ZERO_REGISTER else (_Bank.GENERAL, d)
        self._result_mask = _MASK32

        self.alu_ctrl = ALUControl.ADD
        self._set_register_write()

    def _decode_data_proc_float(self) -> None:
        ir = self.ir
        opcode = ir & 0xFF20FC00
        if opcode == 0x1E203800:  # FSUB (scalar)
            alu = ALUControl.SUB
        elif opcode == 0x1E202800:  # FADD (scalar)
            alu = ALUControl.ADD
        else:
            self._unimplemented()
        # Only single precision (ftype == 00) is supported.
        if ir & 0x00C00000:
            self._unimplemented()

        self.fp_op = FPOp.FP_REG_32
        n = (ir & 0x000003E0) >> 5
        m = (ir & 0x001F0000) >> 16
        self.a = self.get_s_bits(n)
        self.b = self.get_s_bits(m)

        d = ir & 0x0000001F
        self._rd = (_Bank.FLOAT, d)
        self._result_mask = _MASK64

        self.alu_ctrl = alu
        self._set_register_write()