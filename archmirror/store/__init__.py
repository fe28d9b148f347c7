"""Output storage: the mirrored tree root and the summary sinks."""

from .output import SummaryWriter, allocate_output_root

__all__ = ["SummaryWriter", "allocate_output_root"]
