"""Control codes, configuration defaults and the abstract CPU interface."""

from __future__ import annotations

import abc
import enum
from typing import Any

# Executable loaded by default and the address where execution starts.
FILENAME = "isummation.o"
START_ADDRESS = 0x40

# Total size of simulated memory, in bytes.
MEMORY_SIZE = 8388608

# File that receives the memory access log.
MEMORY_LOG_FILE = "saida.txt"


class FPOp(enum.IntEnum):
    """Floating point operating mode; FP_UNDEF means an integer operation."""

    FP_UNDEF = 0
    FP_REG_128 = enum.auto()
    FP_REG_64 = enum.auto()
    FP_REG_32 = enum.auto()
    FP_REG_16 = enum.auto()
    FP_REG_8 = enum.auto()
    FP_VEC_128 = enum.auto()
    FP_VEC_64 = enum.auto()


class ALUControl(enum.IntEnum):
    """Operation selected for the arithmetic logic unit."""

    ALU_UNDEF = 0
    ALU_NONE = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    DIV = enum.auto()
    MUL = enum.auto()


class MEMControl(enum.IntEnum):
    """Kind of data memory access performed in the MEM stage."""

    MEM_UNDEF = 0
    MEM_NONE = enum.auto()
    READ32 = enum.auto()
    WRITE32 = enum.auto()
    READ64 = enum.auto()
    WRITE64 = enum.auto()


class WBControl(enum.IntEnum):
    """Whether the write-back stage writes a destination register."""

    WB_UNDEF = 0
    WB_NONE = enum.auto()
    RegWrite = enum.auto()


class CPUError(Exception):
    """Raised when the CPU cannot carry on executing."""


class UnimplementedInstructionError(CPUError):
    """Raised when an instruction or control code is not implemented."""


class CPU(abc.ABC):
    """A processor core attached to a memory."""

    def __init__(self, memory: Any) -> None:
        self.memory = memory
        self.process_finished = False

    @abc.abstractmethod
    def run(self, start_address: int) -> int:
        """Execute from ``start_address`` until the process finishes."""