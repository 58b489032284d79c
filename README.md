# armsim

A small simulator of an AArch64 (ARMv8) CPU. It is built around the
classic MIPS-style datapath and is meant for teaching computer
architecture. Each stage is a separate method, so you can step through an
instruction and look at every auxiliary register along the way.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `armsim.bits` converts between floating-point values and their raw bit
  patterns. It provides `float_as_uint64_low`, `uint64_low_as_float`,
  `double_as_uint64` and `uint64_as_double`.
- `armsim.controls` holds four things:
  - the datapath control signals `FPOp`, `ALUControl`, `MEMControl` and
    `WBControl`, all of them `IntEnum`s;
  - the exceptions `CPUError` and `UnimplementedInstructionError`, where
    the second is a subclass of the first;
  - the abstract base class `CPU`;
  - the defaults `FILENAME`, `START_ADDRESS` (`0x40`), `MEMORY_SIZE` and
    `MEMORY_LOG_FILE`.
- `armsim.cpu` provides `BasicCPU`, the datapath itself.

## Supported instructions

The decoder in `BasicCPU` understands these instructions:

- `SUB` (immediate), 64-bit variant without a shifted immediate, such as
  `sub sp, sp, #16`. Register 31 is read and written as `SP`.
- `ADD` (shifted register), 32-bit variant with `LSL`, `LSR` or `ASR`,
  such as `add w1, w1, w0`. Register 31 is read as zero. The result is
  kept to 32 bits.
- `FSUB` and `FADD` (scalar), single precision only, such as
  `fsub s0, s1, s0`.

Anything else raises `UnimplementedInstructionError`. That includes other
encodings, other variants, and control codes the stages do not handle.

## Using `BasicCPU`

`BasicCPU(memory)` takes a memory object. That object must provide five
methods:

- `read_instruction32(address)`
- `read_data32(address)`
- `read_data64(address)`
- `write_data32(address, value)`
- `write_data64(address, value)`

This example runs one instruction stage by stage:

```python
from armsim.cpu import BasicCPU
from armsim.controls import ALUControl

class Memory:
    def __init__(self):
        self.words = {0x40: 0xD10043FF}          # sub sp, sp, #16
    def read_instruction32(self, address):
        return self.words[address]
    def read_data32(self, address): return 0
    def read_data64(self, address): return 0
    def write_data32(self, address, value): pass
    def write_data64(self, address, value): pass

cpu = BasicCPU(Memory())
cpu.pc = 0x40
cpu.sp = 0x1000
cpu.fetch()
cpu.decode()
assert cpu.alu_ctrl is ALUControl.SUB
assert (cpu.a, cpu.b) == (0x1000, 16)
cpu.execute_integer()
cpu.memory_access()
cpu.write_back()
assert cpu.rd_value() == 0x1000 - 16
assert cpu.sp == 0x1000 - 16
```

### Stages

Each stage reads and writes plain attributes of the CPU.

| Stage | Method | Reads | Writes |
|---|---|---|---|
| Fetch | `fetch()` | `pc` | `ir` |
| Decode | `decode()` | `ir` | `a`, `b`, `alu_ctrl`, `fp_op`, `mem_ctrl`, `wb_ctrl`, `mem_to_reg`, destination register |
| Execute (integer) | `execute_integer()` | `a`, `b` | `alu_out` |
| Execute (float) | `execute_float()` | `a`, `b` | `alu_out` |
| Memory access | `memory_access()` | `alu_out` | `mdr`, or memory |
| Write-back | `write_back()` | `alu_out` or `mdr` | destination register |

`execute_float()` works on the values as single-precision bit patterns.

`memory_access()` reads into `mdr` or writes the destination register's
value to memory, according to `mem_ctrl`.

`write_back()` writes `alu_out` or `mdr` to the destination register.
Which one it writes depends on `mem_to_reg`.

`rd_value()` returns the current content of the destination register
that was last decoded.

`reset_flags()` puts the control signals back to their undefined values.

### Registers

The register file is held in four attributes:

- `r`: 31 integer registers.
- `v`: 32 floating-point registers, held as raw 64-bit values.
- `sp`: the stack pointer.
- `pc`: the program counter.

Use these methods to access the registers:

- `get_w` and `set_w` for the 32-bit integer registers. `set_w` clears
  the upper half.
- `get_x` and `set_x` for the 64-bit integer registers.
- `get_s`, `get_s_bits` and `set_s` for single-precision registers.
- `get_d` and `set_d` for double-precision registers.

### Running

`run(start_address)` sets `pc` and then loops. Each pass through the
loop runs one cycle (fetch, decode, execute, memory access, write-back)
and adds 4 to `pc`.

The loop stops only when `process_finished` is true. No instruction in
the supported set sets it, and there are no branches. In practice a run
ends when it reaches an instruction the decoder does not support, which
raises `UnimplementedInstructionError`.

## What the package does not do

- It has no memory implementation. You supply the memory object.
- It has no loader for object or ELF files. `FILENAME` is only a default
  name, and nothing in the package opens that file.
- It has no command-line program.
- It does not implement loads, stores, branches, comparisons, or the
  condition flags. `n_flag`, `z_flag`, `c_flag` and `v_flag` exist but
  are never updated.