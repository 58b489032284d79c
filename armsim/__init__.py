"""A small AArch64 CPU simulator with a MIPS-style teaching datapath."""

__version__ = "0.1.0"
__all__ = ["bits", "controls", "cpu"]