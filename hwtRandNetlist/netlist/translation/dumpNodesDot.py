import html
import pydot
from typing import Dict, Union

from hwt.pyUtils.typingFuture import override
from hwtRandNetlist.netlist.analysis.randNetlistAnalysisPass import RandNetlistAnalysisPass
from hwtRandNetlist.netlist.context import RandNetlistCtx
from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement, RandNetControlBlock
from hwtRandNetlist.netlist.operation import RandNetOperation
from hwtRandNetlist.netlist.signal import RandNetSignal, SIGNAL_ROLE
from hwtRandNetlist.platform.fileUtils import OutputStreamGetter

COLOR_INPUT = "LightGreen"
COLOR_OUTPUT = "LightBlue"
COLOR_REG = "plum"
COLOR_OPERATION = "white"
COLOR_WIDTH_COERCION = "red"

_ROLE_COLOR = {
    SIGNAL_ROLE.INPUT: COLOR_INPUT,
    SIGNAL_ROLE.OUTPUT: COLOR_OUTPUT,
    SIGNAL_ROLE.WIRE: "white",
    SIGNAL_ROLE.REG: COLOR_REG,
}


class RandNetlistToGraphviz():
    """
    Generate a Graphviz (dot) diagram of the netlist.
    Signals and operations are nodes, operations of control blocks are placed in a cluster
    for each control block.
    """

    def __init__(self, name: str, netlist: RandNetlistCtx, addLegend: bool):
        self.name = name
        self.netlist = netlist
        self.graph = pydot.Dot(f'"{name}"')
        self.obj_to_node: Dict[Union[RandNetSignal, RandNetOperation], pydot.Node] = {}
        self.addLegend = addLegend

    def _constructLegend(self):
        legendTable = f"""<
<table border="0" cellborder="1" cellspacing="0">
  <tr><td bgcolor="{COLOR_INPUT:s}">input</td></tr>
  <tr><td bgcolor="{COLOR_OUTPUT:s}">output</td></tr>
  <tr><td bgcolor="{COLOR_REG:s}">reg</td></tr>
  <tr><td bgcolor="{COLOR_OPERATION:s}">operation</td></tr>
  <tr><td bgcolor="{COLOR_WIDTH_COERCION:s}">unchecked width coercion</td></tr>
</table>>"""
        return pydot.Node("legend", label=legendTable, style='filled', shape="plain")

    @staticmethod
    def _signalLabel(s: RandNetSignal):
        sign = "s" if s.isSigned else "u"
        return f'"{html.escape(s.name):s} {sign:s}{s.width:d}"'

    def _addSignal(self, g: pydot.Graph, s: RandNetSignal):
        node = pydot.Node(f"s{s._id:d}", label=self._signalLabel(s), shape="box",
                          style="filled", fillcolor=_ROLE_COLOR[s.role])
        g.add_node(node)
        self.obj_to_node[s] = node
        return node

    def _addOperation(self, g: pydot.Graph, op: RandNetOperation):
        label = f'"{op.kind.name:s} {op._id:d} d={op.depth:d} st={op.pipelineStage:d}"'
        node = pydot.Node(f"o{op._id:d}", label=label, shape="ellipse")
        g.add_node(node)
        self.obj_to_node[op] = node
        return node

    def _addOperationEdges(self, op: RandNetOperation):
        opNode = self.obj_to_node[op]
        for i, o in enumerate(op.operands):
            self.graph.add_edge(pydot.Edge(self.obj_to_node[o].get_name(), opNode.get_name(), label=f'"{i:d}"'))
        self.graph.add_edge(pydot.Edge(opNode.get_name(), self.obj_to_node[op.output].get_name()))

    def _addControlBlock(self, i: int, b: RandNetControlBlock):
        if isinstance(b, RandNetCaseStatement):
            label = f"case ({b.selector.name:s})"
        else:
            label = "if/else"
        cluster = pydot.Cluster(f"cb{i:d}", label=f'"{html.escape(label):s}"')
        self.graph.add_subgraph(cluster)
        for op in b.iterOperations():
            self._addOperation(cluster, op)
        return cluster

    def construct(self):
        netlist = self.netlist
        g = self.graph
        for s in netlist.signals.iterAll():
            self._addSignal(g, s)

        for op in netlist.operations:
            self._addOperation(g, op)

        for i, b in enumerate(netlist.controlBlocks):
            self._addControlBlock(i, b)
            if isinstance(b, RandNetCaseStatement):
                sel = self.obj_to_node[b.selector].get_name()
                regions = b.cases
            else:
                sel = None
                regions = b.branches

            for r in regions:
                for dst, src in r.assignments:
                    g.add_edge(pydot.Edge(self.obj_to_node[src].get_name(), self.obj_to_node[dst].get_name(), style="dashed"))
            if sel is not None:
                for dst in b.getWrittenSignals():
                    g.add_edge(pydot.Edge(sel, self.obj_to_node[dst].get_name(), style="dotted"))

        for op in netlist.iterAllOperations():
            self._addOperationEdges(op)

        for c in netlist.outputConnections:
            attrs = {}
            if c.isWidthCoerced():
                attrs["color"] = COLOR_WIDTH_COERCION
            g.add_edge(pydot.Edge(self.obj_to_node[c.source].get_name(), self.obj_to_node[c.output].get_name(), **attrs))

        if self.addLegend:
            g.add_node(self._constructLegend())

    def dumps(self):
        return self.graph.to_string()


class RandNetlistAnalysisPassDumpNodesDot(RandNetlistAnalysisPass):
    """
    Dump netlist in graphviz dot format using :class:`~.RandNetlistToGraphviz`
    """

    def __init__(self, outStreamGetter: OutputStreamGetter, addLegend: bool=True):
        RandNetlistAnalysisPass.__init__(self)
        self.outStreamGetter = outStreamGetter
        self.addLegend = addLegend

    @override
    def runOnRandNetlistImpl(self, netlist: RandNetlistCtx):
        name = netlist.label
        out, doClose = self.outStreamGetter(name)
        try:
            toGraphviz = RandNetlistToGraphviz(name, netlist, self.addLegend)
            toGraphviz.construct()
            out.write(toGraphviz.dumps())
        finally:
            if doClose:
                out.close()
