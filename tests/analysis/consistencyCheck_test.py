#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest

from hwtRandNetlist.netlist.analysis.consistencyCheck import RandNetlistPassConsistencyCheck
from hwtRandNetlist.netlist.context import RandNetlistCtx, RandNetOutputConnection
from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement, RandNetIfElseChain, \
    RandNetSharingGroup
from hwtRandNetlist.netlist.opKind import OP_KIND


class RandNetlistPassConsistencyCheck_TC(unittest.TestCase):

    def setUp(self):
        netlist = self.netlist = RandNetlistCtx("test")
        s = netlist.signals
        self.a = s.createInput(8)
        self.b = s.createInput(4)
        self.o = s.createOutput(8)

    def _addOp(self, kind, operands, width, isSigned=False):
        netlist = self.netlist
        w = netlist.signals.createWire(width, isSigned)
        op = netlist.createOperation(kind, w, operands)
        netlist.addOperation(op)
        return op

    def _check(self, checkWidths=True):
        RandNetlistPassConsistencyCheck(checkWidths).runOnRandNetlist(self.netlist)

    def _connectOutputs(self, src):
        self.netlist.addOutputConnection(RandNetOutputConnection(self.o, src))

    def test_valid(self):
        op = self._addOp(OP_KIND.ADD, (self.a, self.b), 8)
        self._addOp(OP_KIND.EQ, (op.output, self.b), 1)
        self._connectOutputs(op.output)
        self._check()

    def test_wrongWidth(self):
        op = self._addOp(OP_KIND.MUL, (self.a, self.b), 8)
        self._connectOutputs(op.output)
        with self.assertRaises(AssertionError):
            self._check()
        self._check(checkWidths=False)

    def test_wrongSignedness(self):
        op = self._addOp(OP_KIND.SUB, (self.a, self.b), 8, isSigned=True)
        self._connectOutputs(op.output)
        with self.assertRaises(AssertionError):
            self._check()

    def test_danglingOperand(self):
        netlist = self.netlist
        out = netlist.signals.createWire(8)
        late = netlist.signals.createWire(8)
        netlist.addOperation(netlist.createOperation(OP_KIND.OR, out, (self.a, late)))
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

    def test_operandFromOtherNetlist(self):
        other = RandNetlistCtx("other")
        foreign = other.signals.createInput(8)
        self._addOp(OP_KIND.XOR, (self.a, foreign), 8)
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

    def test_multipleDrivers(self):
        netlist = self.netlist
        op = self._addOp(OP_KIND.AND, (self.a, self.a), 8)
        netlist.addOperation(netlist.createOperation(OP_KIND.OR, op.output, (self.a, self.a)))
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

    def test_missingOutputConnection(self):
        self._addOp(OP_KIND.ADD, (self.a, self.b), 8)
        with self.assertRaises(AssertionError):
            self._check()

    def test_noSignalsNoConnections(self):
        netlist = RandNetlistCtx("empty")
        netlist.signals.createOutput(4)
        RandNetlistPassConsistencyCheck().runOnRandNetlist(netlist)

    def test_caseStatementDefault(self):
        netlist = self.netlist
        r0 = netlist.signals.createReg(8)
        r1 = netlist.signals.createReg(8)
        b = RandNetCaseStatement(self.b)
        for v in range(2):
            c = b.addCase(v)
            c.addAssignment(r0, self.a)
            c.addAssignment(r1, self.a)
        b.setDefaultCase([(r0, self.a)])
        netlist.addControlBlock(b)
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

        b.setDefaultCase([(r0, self.a), (r1, self.b)])
        self._check()

    def test_caseValuesConsecutive(self):
        netlist = self.netlist
        r0 = netlist.signals.createReg(8)
        b = RandNetCaseStatement(self.b)
        for v in (0, 2):
            b.addCase(v).addAssignment(r0, self.a)
        b.setDefaultCase([(r0, self.a)])
        netlist.addControlBlock(b)
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

    def test_regionsWriteSameRegs(self):
        netlist = self.netlist
        r0 = netlist.signals.createReg(8)
        r1 = netlist.signals.createReg(8)
        b = RandNetIfElseChain()
        b.addBranch(self.b).addAssignment(r0, self.a)
        br = b.addElseBranch()
        br.addAssignment(r1, self.a)
        netlist.addControlBlock(b)
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

        br.addAssignment(r0, self.b)
        b.branches[0].addAssignment(r1, self.b)
        self._check()

    def test_controlBlockOperationNotInDatapath(self):
        netlist = self.netlist
        r0 = netlist.signals.createReg(16)
        b = RandNetIfElseChain()
        br = b.addElseBranch()
        op = self._addOp(OP_KIND.MUL, (self.a, self.a), 16)
        br.addOperation(op)
        br.addAssignment(r0, op.output)
        netlist.addControlBlock(b)
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

    def test_sharingGroupOperationInDatapath(self):
        netlist = self.netlist
        g = RandNetSharingGroup(self.b)
        w = netlist.signals.createWire(12)
        op = netlist.createOperation(OP_KIND.MUL, w, (self.a, self.b))
        g.addOperation(op)
        netlist.addSharingGroup(g)
        self._connectOutputs(self.a)
        with self.assertRaises(AssertionError):
            self._check()

        netlist.addOperation(op)
        self._check()


if __name__ == '__main__':
    unittest.main()
