from typing import List, Optional

from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement, RandNetIfElseChain, \
    RandNetSharingGroup, RandNetControlRegion
from hwtRandNetlist.netlist.opKind import OP_KIND
from hwtRandNetlist.netlist.signal import RandNetSignal


class RandNetlistControlFlowGenerator():
    """
    Generate control blocks with mutually exclusive regions (case statements, if/else chains)
    and groups of operations which are candidates for resource sharing.

    The regions of a single control block all write the same set of registers.
    Operations created inside of control blocks are stored only in the control block,
    operations of sharing groups are also appended to the main datapath.

    :note: uses random primitives and the netlist of parent generator so the random stream stays shared
    """
    DEFAULT_BLOCK_CNT = 2

    def __init__(self, parent: "RandNetlistGenerator"):
        self.parent = parent
        self.config = parent.config
        self.netlist = parent.netlist

    @classmethod
    def _resolveBlockCnt(cls, cnt: int, enabled: bool):
        if cnt > 0:
            return cnt
        elif enabled:
            return cls.DEFAULT_BLOCK_CNT
        else:
            return 0

    def _createRegs(self) -> List[RandNetSignal]:
        p = self.parent
        regs = []
        for _ in range(p._randInt(1, 3)):
            w = p._randWidth()
            regs.append(self.netlist.signals.createReg(w, p._randSigned()))
        return regs

    def _fillRegion(self, region: RandNetControlRegion, regs: List[RandNetSignal], pool: List[RandNetSignal],
                    sharingProbability: float, kind: Optional[OP_KIND]=None):
        """
        For each register either create an operation and assign its result to the register
        or assign a signal from pool directly.

        :param kind: kind of operation, if None the kind is drawn using arithmetic weights
        """
        p = self.parent
        sharing = self.config.generate_sharing_opportunities
        for r in regs:
            if sharing and p._randBool(sharingProbability):
                a = p._pickSignal(pool)
                b = p._pickSignal(pool)
                if a is None or b is None:
                    continue
                k = kind
                if k is None:
                    k = p._pickArithmeticKind()
                    if k is None:
                        # no arithmetic operation enabled
                        region.addAssignment(r, a)
                        continue
                op = p._createOperation(k, (a, b))
                region.addOperation(op)
                region.addAssignment(r, op.output)
            else:
                src = p._pickSignal(pool)
                if src is not None:
                    region.addAssignment(r, src)

    def _generateCaseStatement(self):
        p = self.parent
        pool = self.netlist.signals.getAvailableSignals()
        if not pool:
            p._dbg.log("case statement skipped, no signal available")
            return

        sel = p._pickSignal(pool)
        caseCnt = min(1 << min(sel.width, 4), self.config.cases_per_statement)
        b = RandNetCaseStatement(sel)
        regs = self._createRegs()
        for v in range(caseCnt):
            c = b.addCase(v)
            self._fillRegion(c, regs, pool, 0.7)

        default = []
        for r in regs:
            src = p._pickSignal(pool)
            default.append((r, src))
        b.setDefaultCase(default)

        self.netlist.addControlBlock(b)
        p._dbg.log(("case statement", sel, caseCnt, "cases", regs))

    def _generateIfElseChain(self):
        p = self.parent
        pool = self.netlist.signals.getAvailableSignals()
        if len(pool) < 3:
            p._dbg.log("if/else chain skipped, not enough signals")
            return

        b = RandNetIfElseChain()
        regs = self._createRegs()
        branchCnt = p._randInt(2, 4)
        for i in range(branchCnt):
            if i < branchCnt - 1:
                br = b.addBranch(p._pickSignal(pool))
            else:
                br = b.addElseBranch()
            self._fillRegion(br, regs, pool, 0.8, kind=OP_KIND.MUL)

        self.netlist.addControlBlock(b)
        p._dbg.log(("if/else chain", branchCnt, "branches", regs))

    def _generateSharingGroups(self):
        p = self.parent
        netlist = self.netlist
        pool = netlist.signals.getAvailableSignals()
        if len(pool) < 4:
            p._dbg.log("sharing groups skipped, not enough signals")
            return

        for _ in range(p._randInt(1, 3)):
            g = RandNetSharingGroup(p._pickSignal(pool))
            for _ in range(p._randInt(2, 3)):
                a = p._pickSignal(pool)
                b = p._pickSignal(pool)
                kind = OP_KIND.MUL if p._randBool(0.7) else OP_KIND.ADD
                op = p._createOperation(kind, (a, b))
                netlist.addOperation(op)
                g.addOperation(op)
            netlist.addSharingGroup(g)
            p._dbg.log(g)

    def generate(self):
        c = self.config
        dbg = self.parent._dbg
        with dbg.scoped(RandNetlistControlFlowGenerator.generate, None):
            for _ in range(self._resolveBlockCnt(c.num_case_statements, c.generate_case_statements)):
                self._generateCaseStatement()

            for _ in range(self._resolveBlockCnt(c.num_if_else_chains, c.generate_if_else_chains)):
                self._generateIfElseChain()

            if c.generate_sharing_opportunities:
                self._generateSharingGroups()
