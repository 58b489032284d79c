import pytest

from armsim.controls import (
    CPU,
    ALUControl,
    CPUError,
    FPOp,
    MEMControl,
    UnimplementedInstructionError,
    WBControl,
)


def test_fpop_order_matches_declaration():
    names = [
        "FP_UNDEF",
        "FP_REG_128",
        "FP_REG_64",
        "FP_REG_32",
        "FP_REG_16",
        "FP_REG_8",
        "FP_VEC_128",
        "FP_VEC_64",
    ]
    assert [member.name for member in FPOp] == names
    assert [FPOp(member.value) for member in FPOp] == [FPOp[name] for name in names]
    assert FPOp(FPOp.FP_REG_32.value) is FPOp.FP_REG_32


def test_alu_control_order_matches_declaration():
    names = ["ALU_UNDEF", "ALU_NONE", "ADD", "SUB", "DIV", "MUL"]
    assert [member.name for member in ALUControl] == names
    assert [ALUControl(member.value) for member in ALUControl] == [
        ALUControl[name] for name in names
    ]
    assert ALUControl(ALUControl.SUB.value) is ALUControl.SUB


def test_mem_control_order_matches_declaration():
    names = ["MEM_UNDEF", "MEM_NONE", "READ32", "WRITE32", "READ64", "WRITE64"]
    assert [member.name for member in MEMControl] == names
    assert [MEMControl(member.value) for member in MEMControl] == [
        MEMControl[name] for name in names
    ]
    assert MEMControl(MEMControl.READ64.value) is MEMControl.READ64


def test_wb_control_order_matches_declaration():
    names = ["WB_UNDEF", "WB_NONE", "RegWrite"]
    assert [member.name for member in WBControl] == names
    assert [WBControl(member.value) for member in WBControl] == [
        WBControl[name] for name in names
    ]
    assert WBControl(WBControl.RegWrite.value) is WBControl.RegWrite


@pytest.mark.parametrize("flag", [FPOp, ALUControl, MEMControl, WBControl])
def test_undefined_member_is_first_and_falsy(flag):
    first = next(iter(flag))
    assert first.name.endswith("UNDEF")
    assert not first


def test_unimplemented_instruction_is_cpu_error():
    error = UnimplementedInstructionError("instruction not implemented")
    assert isinstance(error, CPUError)
    assert str(error) == "instruction not implemented"


def test_cpu_is_abstract():
    with pytest.raises(TypeError):
        CPU(memory=None)


def test_concrete_cpu_keeps_memory_and_runs():
    class HaltingCPU(CPU):
        def run(self, start_address):
            self.process_finished = True
            return start_address

    memory = object()
    cpu = HaltingCPU(memory)
    assert cpu.memory is memory
    assert cpu.process_finished is False
    assert cpu.run(0x40) == 0x40
    assert cpu.process_finished is True

    other_memory = object()
    CPU.__init__(cpu, other_memory)
    assert cpu.memory is other_memory
    assert cpu.process_finished is False