#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from io import StringIO
import unittest

import pydot

from hwtRandNetlist.netlist.context import RandNetlistCtx, RandNetOutputConnection
from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement
from hwtRandNetlist.netlist.opKind import OP_KIND
from hwtRandNetlist.netlist.translation.dumpNodesDot import RandNetlistAnalysisPassDumpNodesDot, \
    RandNetlistToGraphviz
from hwtRandNetlist.netlist.translation.dumpNodesTxt import RandNetlistAnalysisPassDumpNodesTxt
from tests.baseRandNetlistTC import BaseRandNetlistTC


class RandNetlistDumpNodes_TC(BaseRandNetlistTC):

    def _netlist(self):
        netlist = RandNetlistCtx("dump0")
        s = netlist.signals
        sel = s.createInput(1)
        a = s.createInput(8)
        o = s.createOutput(4)
        w = s.createWire(8)
        op = netlist.createOperation(OP_KIND.XOR, w, (a, a))
        netlist.addOperation(op)
        r = s.createReg(8)
        b = RandNetCaseStatement(sel)
        b.addCase(0).addAssignment(r, a)
        b.addCase(1).addAssignment(r, w)
        b.setDefaultCase([(r, a)])
        netlist.addControlBlock(b)
        netlist.addOutputConnection(RandNetOutputConnection(o, w))
        return netlist

    def test_txt(self):
        netlist = self._netlist()
        buf = StringIO()
        RandNetlistAnalysisPassDumpNodesTxt(lambda name: (buf, False)).runOnRandNetlist(netlist)
        lines = buf.getvalue().splitlines()
        self.assertEqual(lines[0], "<RandNetSignal 0 INPUT in_0 u1>")
        self.assertIn("<RandNetOperation 4 wire_0 = XOR(in_1, in_1)> depth=0 stage=0", lines)
        self.assertIn("<RandNetCaseStatement in_0 cases=2>", lines)
        self.assertIn("  <RandNetCaseItem 1>", lines)
        self.assertIn("    reg_1 = wire_0", lines)
        self.assertIn("  default", lines)
        self.assertIn("<RandNetOutputConnection out_0 <- wire_0>", lines)

    def test_dot(self):
        netlist = self._netlist()
        buf = StringIO()
        RandNetlistAnalysisPassDumpNodesDot(lambda name: (buf, False)).runOnRandNetlist(netlist)
        dot = buf.getvalue()
        self.assertIn("digraph", dot)
        self.assertIn("cluster_cb0", dot)
        self.assertIn("legend", dot)
        self.assertIn("red", dot)

    def test_dotGraph(self):
        netlist = self._netlist()
        toGraphviz = RandNetlistToGraphviz("dump0", netlist, False)
        toGraphviz.construct()
        g = toGraphviz.graph
        # signals and operations
        self.assertEqual(len(toGraphviz.obj_to_node), len(netlist.signals) + 1)
        self.assertEqual(len(g.get_subgraph_list()), 1)
        self.assertEqual(g.get_node("legend"), [])
        edges = [(e.get_source(), e.get_destination()) for e in g.get_edge_list()]
        # operands, output, assignments of case items, selector, output connection
        self.assertEqual(len(edges), 2 + 1 + 2 + 1 + 1)
        self.assertIn(("s1", "o4"), edges)
        self.assertIn(("o4", "s3"), edges)
        self.assertIn(("s0", "s5"), edges)

    def test_generated(self):
        netlist = self._generate(seed=5, generate_case_statements=True, generate_if_else_chains=True,
                                 generate_sharing_opportunities=True)
        buf = StringIO()
        RandNetlistAnalysisPassDumpNodesDot(lambda name: (buf, False)).runOnRandNetlist(netlist)
        graphs = pydot.graph_from_dot_data(buf.getvalue())
        self.assertEqual(len(graphs), 1)

        buf = StringIO()
        RandNetlistAnalysisPassDumpNodesTxt(lambda name: (buf, False)).runOnRandNetlist(netlist)
        self.assertIn(repr(netlist.operations[0]), buf.getvalue())


if __name__ == '__main__':
    unittest.main()
