from io import StringIO
from typing import Optional, List, Sequence, Tuple

from hwt.pyUtils.typingFuture import override
from hwtRandNetlist.netlist.analysis.randNetlistAnalysisPass import RandNetlistAnalysisPass
from hwtRandNetlist.netlist.analysisCache import AnalysisCache
from hwtRandNetlist.netlist.controlBlock import RandNetControlBlock, RandNetSharingGroup
from hwtRandNetlist.netlist.opKind import OP_KIND
from hwtRandNetlist.netlist.operation import RandNetOperation
from hwtRandNetlist.netlist.signal import RandNetSignal, SIGNAL_ROLE
from hwtRandNetlist.netlist.signalRegistry import RandNetSignalRegistry


class RandNetOutputConnection():
    """
    Connection of the module output port to a signal which drives it.

    :note: The widths of output and source are not required to match.
        No truncation or extension is inserted, the mismatch is only recorded
        and it is up to the consumer of the netlist to resolve it.
    """
    __slots__ = ["output", "source"]

    def __init__(self, output: RandNetSignal, source: RandNetSignal):
        assert output.role == SIGNAL_ROLE.OUTPUT, output
        assert source.role in (SIGNAL_ROLE.INPUT, SIGNAL_ROLE.WIRE), source
        self.output = output
        self.source = source

    def isWidthCoerced(self) -> bool:
        return self.output.width != self.source.width

    def __repr__(self):
        return f"<{self.__class__.__name__:s} {self.output.name:s} <- {self.source.name:s}>"


class RandNetlistCtx(AnalysisCache):
    """
    Container of the result of a single generation run.

    :ivar label: name of the generated module
    :ivar platform: optional platform with debug configuration
    :ivar signals: registry which owns all signals of this netlist
    :ivar _operations: datapath operations and operations of sharing groups in generation order
    :ivar _controlBlocks: case statements and if/else chains in generation order
    :ivar _sharingGroups: groups of operations for resource sharing
    :ivar _outputConnections: one connection for each output port
    :ivar _dbgLogPassExec: optional stream where execution of analysis passes is logged

    :note: signals and operations share a single id space, the id is the order of creation
    """

    def __init__(self, label: str, platform: Optional["RandNetlistPlatform"]=None):
        AnalysisCache.__init__(self)
        self.label = label
        self.platform = platform
        self._uniqNodeCntr = 0
        self.signals = RandNetSignalRegistry(self.getUniqId)
        self._operations: List[RandNetOperation] = []
        self._controlBlocks: List[RandNetControlBlock] = []
        self._sharingGroups: List[RandNetSharingGroup] = []
        self._outputConnections: List[RandNetOutputConnection] = []
        self._dbgLogPassExec: Optional[StringIO] = None
        if platform is not None:
            self._dbgLogPassExec = platform.getPassManagerDebugLogFile()

    @override
    def _runAnalysisImpl(self, a: RandNetlistAnalysisPass):
        return a.runOnRandNetlist(self)

    def getUniqId(self):
        n = self._uniqNodeCntr
        self._uniqNodeCntr += 1
        return n

    def createOperation(self, kind: OP_KIND, output: RandNetSignal, operands: Sequence[RandNetSignal]) -> RandNetOperation:
        """
        Create an operation object, the operation is not added to any list
        """
        return RandNetOperation(self.getUniqId(), kind, output, operands)

    def addOperation(self, op: RandNetOperation):
        self._operations.append(op)

    def addControlBlock(self, b: RandNetControlBlock):
        self._controlBlocks.append(b)

    def addSharingGroup(self, g: RandNetSharingGroup):
        self._sharingGroups.append(g)

    def addOutputConnection(self, c: RandNetOutputConnection):
        self._outputConnections.append(c)

    @property
    def inputs(self) -> Tuple[RandNetSignal, ...]:
        return tuple(self.signals.inputs)

    @property
    def outputs(self) -> Tuple[RandNetSignal, ...]:
        return tuple(self.signals.outputs)

    @property
    def wires(self) -> Tuple[RandNetSignal, ...]:
        return tuple(self.signals.wires)

    @property
    def regs(self) -> Tuple[RandNetSignal, ...]:
        return tuple(self.signals.regs)

    @property
    def operations(self) -> Tuple[RandNetOperation, ...]:
        return tuple(self._operations)

    @property
    def controlBlocks(self) -> Tuple[RandNetControlBlock, ...]:
        return tuple(self._controlBlocks)

    @property
    def sharingGroups(self) -> Tuple[RandNetSharingGroup, ...]:
        return tuple(self._sharingGroups)

    @property
    def outputConnections(self) -> Tuple[RandNetOutputConnection, ...]:
        return tuple(self._outputConnections)

    def iterAllOperations(self):
        """
        :returns: iterator of all operations including those inside of control blocks
        """
        yield from self._operations
        for b in self._controlBlocks:
            yield from b.iterOperations()

    def __repr__(self):
        return f"<{self.__class__.__name__:s} {self.label:s}>"
