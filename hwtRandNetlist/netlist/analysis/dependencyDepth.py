from networkx.algorithms.dag import topological_sort
from networkx.classes.digraph import DiGraph
from typing import Dict, Optional

from hwt.pyUtils.typingFuture import override
from hwtRandNetlist.netlist.analysis.randNetlistAnalysisPass import RandNetlistAnalysisPass
from hwtRandNetlist.netlist.context import RandNetlistCtx
from hwtRandNetlist.netlist.operation import RandNetOperation
from hwtRandNetlist.netlist.signal import RandNetSignal
from hwtRandNetlist.platform.fileUtils import OutputStreamGetter


class RandNetlistAnalysisPassDependencyDepth(RandNetlistAnalysisPass):
    """
    Compute the combinational depth of every signal as the number of operations on the longest path
    from any input (inputs have depth 0).

    :note: This is only an analysis, the depth labels stored in operations are not modified.
    :ivar graph: signal dependency graph, edge operand -> output for every operation
    :ivar signalDepth: depth for every signal which is an input or is driven by some operation
    :ivar operationDepth: depth of the output of every operation
    """

    def __init__(self):
        RandNetlistAnalysisPass.__init__(self)
        self.graph: Optional[DiGraph] = None
        self.signalDepth: Dict[RandNetSignal, int] = {}
        self.operationDepth: Dict[RandNetOperation, int] = {}

    def getMaxDepth(self) -> int:
        return max(self.operationDepth.values(), default=0)

    @override
    def runOnRandNetlistImpl(self, netlist: RandNetlistCtx):
        g = self.graph = DiGraph()
        for i in netlist.inputs:
            g.add_node(i)

        for op in netlist.iterAllOperations():
            g.add_node(op.output)
            for o in op.operands:
                g.add_edge(o, op.output)

        depth = self.signalDepth
        for s in topological_sort(g):
            preds = list(g.predecessors(s))
            if preds:
                depth[s] = max(depth[p] for p in preds) + 1
            else:
                # inputs and wires without driver
                depth[s] = 0

        for op in netlist.iterAllOperations():
            self.operationDepth[op] = depth[op.output]


class RandNetlistAnalysisPassDumpDependencyDepth(RandNetlistAnalysisPass):
    """
    Dump labeled depth and real combinational depth of every operation.
    """

    def __init__(self, outStreamGetter: OutputStreamGetter):
        RandNetlistAnalysisPass.__init__(self)
        self.outStreamGetter = outStreamGetter

    @override
    def runOnRandNetlistImpl(self, netlist: RandNetlistCtx):
        depth: RandNetlistAnalysisPassDependencyDepth = netlist.getAnalysis(RandNetlistAnalysisPassDependencyDepth)
        out, doClose = self.outStreamGetter(netlist.label)
        try:
            for op in sorted(netlist.iterAllOperations(), key=lambda op: op._id):
                out.write(f"{op._id:d} {op.output.name:s} depth={op.depth:d} dependencyDepth={depth.operationDepth[op]:d}\n")
            out.write(f"max dependencyDepth={depth.getMaxDepth():d}\n")
        finally:
            if doClose:
                out.close()
