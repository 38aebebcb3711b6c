from io import StringIO

from hwt.pyUtils.typingFuture import override
from hwtRandNetlist.netlist.analysis.randNetlistAnalysisPass import RandNetlistAnalysisPass
from hwtRandNetlist.netlist.context import RandNetlistCtx
from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement, RandNetControlRegion
from hwtRandNetlist.platform.fileUtils import OutputStreamGetter


class RandNetlistAnalysisPassDumpNodesTxt(RandNetlistAnalysisPass):
    """
    Dump all signals, operations and control blocks of the netlist as text.
    """

    def __init__(self, outStreamGetter: OutputStreamGetter):
        RandNetlistAnalysisPass.__init__(self)
        self.outStreamGetter = outStreamGetter

    @staticmethod
    def _printRegion(indent: str, region: RandNetControlRegion, out: StringIO):
        for op in region.operations:
            out.write(f"{indent:s}{op}\n")
        for dst, src in region.assignments:
            out.write(f"{indent:s}{dst.name:s} = {src.name:s}\n")

    @classmethod
    def _printNetlist(cls, netlist: RandNetlistCtx, out: StringIO):
        # :note: sort is to improve readability
        for s in sorted(netlist.signals.iterAll(), key=lambda s: s._id):
            out.write(f"{s}\n")
        out.write("\n")
        for op in netlist.operations:
            out.write(f"{op} depth={op.depth:d} stage={op.pipelineStage:d}\n")
        out.write("\n")
        for b in netlist.controlBlocks:
            out.write(f"{b}\n")
            if isinstance(b, RandNetCaseStatement):
                for c in b.cases:
                    out.write(f"  {c}\n")
                    cls._printRegion("    ", c, out)
                out.write("  default\n")
                for dst, src in b.defaultAssignments:
                    out.write(f"    {dst.name:s} = {src.name:s}\n")
            else:
                for br in b.branches:
                    out.write(f"  {br}\n")
                    cls._printRegion("    ", br, out)
        for g in netlist.sharingGroups:
            out.write(f"{g}\n")
        for c in netlist.outputConnections:
            out.write(f"{c}\n")

    @override
    def runOnRandNetlistImpl(self, netlist: RandNetlistCtx):
        out, doClose = self.outStreamGetter(netlist.label)
        try:
            self._printNetlist(netlist, out)
            out.write("\n")
        finally:
            if doClose:
                out.close()
