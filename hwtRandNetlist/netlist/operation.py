from typing import Sequence, Tuple

from hwtRandNetlist.netlist.opKind import OP_KIND, opKindCheckArity
from hwtRandNetlist.netlist.signal import RandNetSignal


class RandNetOperation():
    """
    A single typed operation which drives its output signal from operand signals.

    :ivar _id: unique index of this object in parent netlist
    :ivar kind: the operator
    :ivar output: the signal driven by this operation
    :ivar operands: the signals read by this operation (shared references)
    :ivar depth: pipeline depth label (set by generator after all operations are generated)
    :ivar pipelineStage: pipeline stage tag (set by generator if pipeline stages are enabled)

    :note: depth and pipelineStage are only labels, they are not derived from data dependencies
    """
    __slots__ = ["_id", "kind", "output", "operands", "depth", "pipelineStage"]

    def __init__(self, _id: int, kind: OP_KIND, output: RandNetSignal, operands: Sequence[RandNetSignal]):
        assert opKindCheckArity(kind, len(operands)), ("Wrong number of operands", kind, operands)
        for o in operands:
            assert isinstance(o, RandNetSignal), (kind, o)
        self._id = _id
        self.kind = kind
        self.output = output
        self.operands: Tuple[RandNetSignal, ...] = tuple(operands)
        self.depth = 0
        self.pipelineStage = 0

    def __repr__(self):
        ops = ", ".join(o.name for o in self.operands)
        return f"<{self.__class__.__name__:s} {self._id:d} {self.output.name:s} = {self.kind.name:s}({ops:s})>"
