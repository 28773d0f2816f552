"""Background workers."""

from gate.interface.worker.sweeper import ExpirySweeper, SweepReport

__all__ = ["ExpirySweeper", "SweepReport"]
