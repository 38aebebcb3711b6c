import unittest

from hwtRandNetlist.generator.generator import RandNetlistGenerator
from hwtRandNetlist.netlist.analysis.consistencyCheck import RandNetlistPassConsistencyCheck
from hwtRandNetlist.netlist.context import RandNetlistCtx
from hwtRandNetlist.platform.config import RandNetlistConfig


class BaseRandNetlistTC(unittest.TestCase):
    """
    A base class for tests which generate a netlist and check its consistency.
    """

    @staticmethod
    def _generate(**configKwargs) -> RandNetlistCtx:
        config = RandNetlistConfig(**configKwargs)
        return RandNetlistGenerator(config).generate()

    @staticmethod
    def _checkConsistency(netlist: RandNetlistCtx):
        RandNetlistPassConsistencyCheck().runOnRandNetlist(netlist)

    @staticmethod
    def _netlistToSummary(netlist: RandNetlistCtx):
        """
        :return: a comparable representation of all generated objects
        """
        signals = [(s.name, s.role.name, s.width, s.isSigned) for s in netlist.signals.iterAll()]
        ops = [(op.kind.name, op.output.name, tuple(o.name for o in op.operands), op.depth, op.pipelineStage)
               for op in netlist.iterAllOperations()]
        blocks = []
        for b in netlist.controlBlocks:
            regions = getattr(b, "cases", None)
            if regions is None:
                regions = b.branches
            blocks.append([[(dst.name, src.name) for dst, src in r.assignments] for r in regions])
        outputs = [(c.output.name, c.source.name) for c in netlist.outputConnections]
        groups = [(g.enable.name, [op.output.name for op in g.operations]) for g in netlist.sharingGroups]
        return signals, ops, blocks, outputs, groups
