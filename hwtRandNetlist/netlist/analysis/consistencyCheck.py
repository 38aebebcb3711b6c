from networkx.algorithms.components.strongly_connected import strongly_connected_components
from networkx.classes.digraph import DiGraph
from typing import Set

from hwt.pyUtils.typingFuture import override
from hwtRandNetlist.netlist.analysis.randNetlistAnalysisPass import RandNetlistAnalysisPass
from hwtRandNetlist.netlist.context import RandNetlistCtx
from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement, RandNetIfElseChain
from hwtRandNetlist.netlist.opKind import opKindCheckArity, opKindInferOutputType
from hwtRandNetlist.netlist.operation import RandNetOperation
from hwtRandNetlist.netlist.signal import SIGNAL_ROLE, RandNetSignal


class RandNetlistPassConsistencyCheck(RandNetlistAnalysisPass):
    """
    Check consistency of the RandNetlistCtx.

    :ivar checkWidths: if True the output type of every operation is checked against inferred type
    """

    def __init__(self, checkWidths: bool=True):
        RandNetlistAnalysisPass.__init__(self)
        self.checkWidths = checkWidths

    @staticmethod
    def _checkSignals(netlist: RandNetlistCtx):
        seenNames: Set[str] = set()
        seenIds: Set[int] = set()
        for s in netlist.signals.iterAll():
            s: RandNetSignal
            assert s.width >= 1, s
            assert s.name not in seenNames, ("Duplicit signal name", s)
            assert s._id not in seenIds, ("Duplicit signal id", s)
            seenNames.add(s.name)
            seenIds.add(s._id)

    @staticmethod
    def _checkOperation(op: RandNetOperation, allSignals: Set[RandNetSignal], checkWidths: bool):
        assert opKindCheckArity(op.kind, len(op.operands)), ("Wrong number of operands", op)
        assert op.output in allSignals, ("Output is not in netlist", op)
        assert op.output.role == SIGNAL_ROLE.WIRE, ("Operations may drive only wires", op, op.output)
        for o in op.operands:
            assert o in allSignals, ("Operand is not in netlist", op, o)
            assert o.role in (SIGNAL_ROLE.INPUT, SIGNAL_ROLE.WIRE), ("Operand must be input or wire", op, o)
            # operands are always created before the output of the operation which reads them
            assert o._id < op.output._id, ("Dangling operand", op, o)
        if checkWidths:
            w, s = opKindInferOutputType(op.kind, op.operands)
            assert op.output.width == w, ("Wrong output width", op, op.output, w)
            assert op.output.isSigned == s, ("Wrong output signedness", op, op.output, s)

    @staticmethod
    def _checkOperationDrivers(netlist: RandNetlistCtx):
        drivenBy = {}
        for op in netlist.iterAllOperations():
            prev = drivenBy.setdefault(op.output, op)
            assert prev is op, ("Wire driven by multiple operations", op.output, prev, op)

    @staticmethod
    def _checkCycleFree(netlist: RandNetlistCtx):
        g = DiGraph()
        for op in netlist.iterAllOperations():
            for o in op.operands:
                g.add_edge(o, op.output)

        for scc in strongly_connected_components(g):
            if len(scc) > 1:
                raise AssertionError("Netlist must be cycle free", sorted(s._id for s in scc))

    @staticmethod
    def _checkControlBlocks(netlist: RandNetlistCtx):
        datapathOps = set(netlist.operations)
        for b in netlist.controlBlocks:
            if isinstance(b, RandNetCaseStatement):
                regions = list(b.cases)
                expected = b.getWrittenSignals()
                assert [c.matchValue for c in regions] == list(range(len(regions))), (
                    "Case values are expected to be consecutive", b, [c.matchValue for c in regions])
                default = [dst for dst, _ in b.defaultAssignments]
                assert set(default) == set(expected), ("Default case must write all registers", b, default, expected)
            elif isinstance(b, RandNetIfElseChain):
                regions = list(b.branches)
                expected = b.getWrittenSignals()
                for br in regions[:-1]:
                    assert not br.isElse(), ("Else branch must be the last branch", b, br)
            else:
                raise AssertionError("Unknown type of control block", b)

            for r in regions:
                for dst, _ in r.assignments:
                    assert dst.role == SIGNAL_ROLE.REG, ("Control blocks may assign only to registers", b, dst)
                written = r.getWrittenSignals()
                assert set(written) == set(expected), ("All regions of control block must write same registers", b, r, written, expected)
                for op in r.operations:
                    assert op not in datapathOps, ("Control block operation is also in datapath", b, op)

    @staticmethod
    def _checkSharingGroups(netlist: RandNetlistCtx):
        ops = set(netlist.operations)
        for g in netlist.sharingGroups:
            assert g.operations, g
            for op in g.operations:
                assert op in ops, ("Sharing group operation must be in datapath", g, op)

    @staticmethod
    def _checkOutputConnections(netlist: RandNetlistCtx):
        conns = netlist.outputConnections
        if not netlist.signals.getAvailableSignals():
            # nothing to connect the outputs to
            assert not conns, conns
            return
        assert len(conns) == len(netlist.outputs), ("Each output must be driven", conns, netlist.outputs)
        for c, o in zip(conns, netlist.outputs):
            assert c.output is o, ("Output connections must be in order of outputs", c, o)

    @override
    def runOnRandNetlistImpl(self, netlist: RandNetlistCtx):
        self._checkSignals(netlist)
        allSignals = set(netlist.signals.iterAll())
        for op in netlist.iterAllOperations():
            self._checkOperation(op, allSignals, self.checkWidths)
        self._checkOperationDrivers(netlist)
        self._checkCycleFree(netlist)
        self._checkControlBlocks(netlist)
        self._checkSharingGroups(netlist)
        self._checkOutputConnections(netlist)
