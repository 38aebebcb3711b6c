#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest

from hwtRandNetlist.generator.controlFlow import RandNetlistControlFlowGenerator
from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement, RandNetIfElseChain
from hwtRandNetlist.netlist.opKind import OP_KIND, ARITHMETIC_OPS
from hwtRandNetlist.netlist.signal import SIGNAL_ROLE
from tests.baseRandNetlistTC import BaseRandNetlistTC


class RandNetlistControlFlowGenerator_TC(BaseRandNetlistTC):

    def _blocksOfType(self, netlist, t):
        return [b for b in netlist.controlBlocks if isinstance(b, t)]

    def test_disabledByDefault(self):
        netlist = self._generate(seed=3)
        self.assertEqual(netlist.controlBlocks, ())
        self.assertEqual(netlist.sharingGroups, ())
        self.assertEqual(netlist.regs, ())

    def test_resolveBlockCnt(self):
        r = RandNetlistControlFlowGenerator._resolveBlockCnt
        self.assertEqual(r(0, False), 0)
        self.assertEqual(r(0, True), RandNetlistControlFlowGenerator.DEFAULT_BLOCK_CNT)
        self.assertEqual(r(5, False), 5)
        self.assertEqual(r(3, True), 3)

    def test_caseStatements(self):
        for seed in range(10):
            netlist = self._generate(seed=seed, num_case_statements=3, cases_per_statement=6)
            self._checkConsistency(netlist)
            blocks = self._blocksOfType(netlist, RandNetCaseStatement)
            self.assertEqual(len(blocks), 3)
            for b in blocks:
                b: RandNetCaseStatement
                self.assertIn(b.selector.role, (SIGNAL_ROLE.INPUT, SIGNAL_ROLE.WIRE))
                self.assertEqual(len(b.cases), min(1 << min(b.selector.width, 4), 6))
                regs = b.getWrittenSignals()
                self.assertTrue(1 <= len(regs) <= 3, regs)
                for c in b.cases:
                    self.assertEqual(set(c.getWrittenSignals()), set(regs))
                    # without sharing each register is a plain copy
                    self.assertEqual(c.operations, [])
                self.assertEqual([dst for dst, _ in b.defaultAssignments], list(regs))

    def test_caseStatementsWithSharing(self):
        netlist = self._generate(seed=4, generate_case_statements=True, generate_sharing_opportunities=True,
                                 cases_per_statement=16)
        self._checkConsistency(netlist)
        blocks = self._blocksOfType(netlist, RandNetCaseStatement)
        self.assertEqual(len(blocks), 2)
        ops = [op for b in blocks for op in b.iterOperations()]
        self.assertTrue(ops)
        datapath = set(netlist.operations)
        for op in ops:
            self.assertIn(op.kind, ARITHMETIC_OPS)
            self.assertNotIn(op, datapath)
            self.assertIn(op.output, netlist.wires)

    def test_ifElseChains(self):
        for seed in range(10):
            netlist = self._generate(seed=seed, num_if_else_chains=2, generate_sharing_opportunities=True)
            self._checkConsistency(netlist)
            blocks = self._blocksOfType(netlist, RandNetIfElseChain)
            self.assertEqual(len(blocks), 2)
            for b in blocks:
                b: RandNetIfElseChain
                self.assertTrue(2 <= len(b.branches) <= 4, b)
                self.assertTrue(b.hasElse())
                for br in b.branches[:-1]:
                    self.assertIsNotNone(br.condition)
                regs = set(b.getWrittenSignals())
                for br in b.branches:
                    self.assertEqual(set(br.getWrittenSignals()), regs)
                for op in b.iterOperations():
                    self.assertEqual(op.kind, OP_KIND.MUL)

    def test_ifElseChainNeedsSignals(self):
        netlist = self._generate(seed=1, num_inputs=2, num_operations=1, generate_if_else_chains=True,
                                 weight_arithmetic=0.0, weight_logical=0.0, weight_comparison=0.0,
                                 weight_shift=0.0, weight_mux=0.0, weight_concat=0.0, weight_reduction=1.0)
        # 2 inputs + 1 reduction result
        self.assertEqual(len(netlist.signals.getAvailableSignals()), 3)
        self.assertEqual(len(self._blocksOfType(netlist, RandNetIfElseChain)), 2)

        netlist = self._generate(seed=1, num_inputs=1, num_operations=1, generate_if_else_chains=True,
                                 weight_arithmetic=0.0, weight_logical=0.0, weight_comparison=0.0,
                                 weight_shift=0.0, weight_mux=0.0, weight_concat=0.0, weight_reduction=1.0)
        self.assertEqual(netlist.controlBlocks, ())
        self.assertEqual(netlist.regs, ())

    def test_sharingGroups(self):
        for seed in range(10):
            netlist = self._generate(seed=seed, generate_sharing_opportunities=True)
            self._checkConsistency(netlist)
            groups = netlist.sharingGroups
            self.assertTrue(1 <= len(groups) <= 3, groups)
            datapath = netlist.operations
            for g in groups:
                self.assertTrue(2 <= len(g.operations) <= 3, g)
                self.assertIn(g.enable.role, (SIGNAL_ROLE.INPUT, SIGNAL_ROLE.WIRE))
                for op in g.operations:
                    self.assertIn(op.kind, (OP_KIND.MUL, OP_KIND.ADD))
                    self.assertIn(op, datapath)
            # sharing group operations are appended after the datapath
            groupOps = [op for g in groups for op in g.operations]
            self.assertEqual(list(datapath[-len(groupOps):]), groupOps)

    def test_sharingGroupsNeedSignals(self):
        netlist = self._generate(seed=2, num_inputs=3, num_operations=1, generate_sharing_opportunities=True,
                                 weight_arithmetic=0.0, weight_logical=0.0, weight_comparison=0.0,
                                 weight_shift=0.0, weight_mux=0.0, weight_concat=0.0, weight_reduction=1.0)
        self.assertTrue(netlist.sharingGroups)
        # the pool seen by the sharing group generator, without outputs of the groups themselves
        groupOpCnt = sum(len(g.operations) for g in netlist.sharingGroups)
        self.assertEqual(len(netlist.inputs) + len(netlist.wires) - groupOpCnt, 4)

        netlist = self._generate(seed=2, num_inputs=2, num_operations=1, generate_sharing_opportunities=True,
                                 weight_arithmetic=0.0, weight_logical=0.0, weight_comparison=0.0,
                                 weight_shift=0.0, weight_mux=0.0, weight_concat=0.0, weight_reduction=1.0)
        self.assertEqual(netlist.sharingGroups, ())
        self.assertEqual(len(netlist.operations), 1)

    def test_regsAreNeverRead(self):
        netlist = self._generate(seed=8, generate_case_statements=True, generate_if_else_chains=True,
                                 generate_sharing_opportunities=True)
        regs = set(netlist.regs)
        self.assertTrue(regs)
        for op in netlist.iterAllOperations():
            for o in op.operands:
                self.assertNotIn(o, regs)
        for c in netlist.outputConnections:
            self.assertNotIn(c.source, regs)


if __name__ == '__main__':
    unittest.main()
