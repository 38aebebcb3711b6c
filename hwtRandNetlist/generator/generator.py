from enum import Enum
import random
import sys
from typing import Optional, List, Sequence, Tuple

from hwtRandNetlist.debugTracer import DebugTracer
from hwtRandNetlist.generator.controlFlow import RandNetlistControlFlowGenerator
from hwtRandNetlist.netlist.context import RandNetlistCtx, RandNetOutputConnection
from hwtRandNetlist.netlist.opKind import OP_KIND, LOGICAL_OPS, COMPARE_OPS, \
    REDUCTION_OPS, opKindInferOutputType
from hwtRandNetlist.netlist.operation import RandNetOperation
from hwtRandNetlist.netlist.signal import RandNetSignal
from hwtRandNetlist.platform.config import RandNetlistConfig
from hwtRandNetlist.platform.debugBundle import RandNetlistDebugBundle


class OP_CATEGORY(Enum):
    """
    Category of datapath operation, the order of members is the order of weights in weighted draw.
    """
    ARITHMETIC, LOGICAL, COMPARISON, SHIFT, MUX, CONCAT, REDUCTION = range(7)


ARITHMETIC_KINDS = (OP_KIND.ADD, OP_KIND.SUB, OP_KIND.MUL, OP_KIND.DIV, OP_KIND.MOD)
SHIFT_KINDS = (OP_KIND.SHL, OP_KIND.SHR, OP_KIND.ASHR)


class RandNetlistGenerator():
    """
    Deterministic generator of random dataflow netlists.

    The generation runs in phases: inputs, outputs, datapath, pipeline stage tagging,
    control blocks, output connection and depth labeling. If an operand can not be drawn because
    the pool of available signals is empty, the operation is silently dropped.

    :ivar config: the configuration, it is not validated by the generator
    :ivar platform: optional platform with debug configuration
    :ivar _rand: the only source of randomness used during generation
    :ivar netlist: the netlist which is being generated
    :ivar _dbg: tracer for generator decisions
    """

    def __init__(self, config: RandNetlistConfig, platform: Optional["RandNetlistPlatform"]=None):
        if config.seed is None:
            config.seed = random.randrange(1 << 32)
        self.config = config
        self.platform = platform
        self._rand = random.Random(config.seed)
        self.netlist: Optional[RandNetlistCtx] = None
        self._dbg = DebugTracer(None)

    # random primitives, each of them defines how many values are consumed from random stream
    def _randInt(self, low: int, high: int) -> int:
        "inclusive range"
        return self._rand.randint(low, high)

    def _randBool(self, probability: float) -> bool:
        return self._rand.random() < probability

    def _randSigned(self) -> bool:
        "draw signedness only if signed signals are enabled"
        return self.config.use_signed and self._randBool(0.5)

    def _randWidth(self) -> int:
        c = self.config
        return self._randInt(c.input_width_min, c.input_width_max)

    def _pickSignal(self, candidates: Sequence[RandNetSignal]) -> Optional[RandNetSignal]:
        """
        :return: uniformly selected signal or None if there are no candidates (no value is drawn in that case)
        """
        if not candidates:
            return None
        return candidates[self._rand.randrange(len(candidates))]

    def _pickWeighted(self, weights: Sequence[float]) -> Optional[int]:
        """
        :return: index of selected weight or None if no weight is positive (no value is drawn in that case)
        """
        if sum(weights) <= 0:
            return None
        return self._rand.choices(range(len(weights)), weights=weights)[0]

    def _pickCategory(self) -> Optional[OP_CATEGORY]:
        c = self.config
        candidates: List[Tuple[OP_CATEGORY, float]] = []
        for cat, name in zip(OP_CATEGORY, RandNetlistConfig.CATEGORY_WEIGHT_NAMES):
            w = getattr(c, name)
            if w > 0:
                candidates.append((cat, w))
        i = self._pickWeighted([w for _, w in candidates])
        if i is None:
            return None
        return candidates[i][0]

    def _pickArithmeticKind(self) -> Optional[OP_KIND]:
        c = self.config
        i = self._pickWeighted([getattr(c, name) for name in RandNetlistConfig.ARITHMETIC_WEIGHT_NAMES])
        return None if i is None else ARITHMETIC_KINDS[i]

    def _pickShiftKind(self) -> Optional[OP_KIND]:
        c = self.config
        i = self._pickWeighted([getattr(c, name) for name in RandNetlistConfig.SHIFT_WEIGHT_NAMES])
        return None if i is None else SHIFT_KINDS[i]

    def _pickOperands(self, pool: Sequence[RandNetSignal], cnt: int) -> Optional[List[RandNetSignal]]:
        """
        :return: list of cnt operands or None if operands could not be drawn
        """
        operands = [self._pickSignal(pool) for _ in range(cnt)]
        if any(o is None for o in operands):
            return None
        return operands

    def _createOperation(self, kind: OP_KIND, operands: Sequence[RandNetSignal]) -> RandNetOperation:
        """
        Create an output wire with the inferred type and the operation which drives it.
        The operation is not added to any list.
        """
        width, isSigned = opKindInferOutputType(kind, operands)
        out = self.netlist.signals.createWire(width, isSigned)
        return self.netlist.createOperation(kind, out, operands)

    def _generateInputs(self):
        c = self.config
        signals = self.netlist.signals
        for _ in range(c.num_inputs):
            w = self._randInt(c.input_width_min, c.input_width_max)
            signals.createInput(w, self._randSigned())

    def _generateOutputs(self):
        c = self.config
        signals = self.netlist.signals
        for _ in range(c.num_outputs):
            w = self._randInt(c.output_width_min, c.output_width_max)
            signals.createOutput(w, self._randSigned())

    def _generateArithmeticOp(self, pool: List[RandNetSignal]):
        kind = self._pickArithmeticKind()
        if kind is None:
            return None
        operands = self._pickOperands(pool, 2)
        if operands is None:
            return None
        return self._createOperation(kind, operands)

    def _generateLogicalOp(self, pool: List[RandNetSignal]):
        kind = LOGICAL_OPS[self._randInt(0, len(LOGICAL_OPS) - 1)]
        operands = self._pickOperands(pool, 1 if kind == OP_KIND.NOT else 2)
        if operands is None:
            return None
        return self._createOperation(kind, operands)

    def _generateComparisonOp(self, pool: List[RandNetSignal]):
        kind = COMPARE_OPS[self._randInt(0, len(COMPARE_OPS) - 1)]
        operands = self._pickOperands(pool, 2)
        if operands is None:
            return None
        return self._createOperation(kind, operands)

    def _generateShiftOp(self, pool: List[RandNetSignal]):
        kind = self._pickShiftKind()
        if kind is None:
            return None
        operands = self._pickOperands(pool, 2)
        if operands is None:
            return None
        return self._createOperation(kind, operands)

    def _generateMuxOp(self, pool: List[RandNetSignal]):
        if self._randBool(0.3):
            sel = self._pickSignal(pool)
            if sel is None:
                return None
            elif sel.width < 2:
                # :note: this wire has no driver
                sel = self.netlist.signals.createWire(2, False)
                self._dbg.log(("mux4 uses a new undriven selector", sel))
            data = self._pickOperands(pool, 4)
            if data is None:
                return None
            return self._createOperation(OP_KIND.MUX4, [sel, *data])
        else:
            operands = self._pickOperands(pool, 3)
            if operands is None:
                return None
            return self._createOperation(OP_KIND.MUX2, operands)

    def _generateConcatOp(self, pool: List[RandNetSignal]):
        operands = self._pickOperands(pool, self._randInt(2, 4))
        if operands is None:
            return None
        return self._createOperation(OP_KIND.CONCAT, operands)

    def _generateReductionOp(self, pool: List[RandNetSignal]):
        kind = REDUCTION_OPS[self._randInt(0, len(REDUCTION_OPS) - 1)]
        operands = self._pickOperands(pool, 1)
        if operands is None:
            return None
        return self._createOperation(kind, operands)

    def _generateDatapath(self):
        netlist = self.netlist
        signals = netlist.signals
        generators = {
            OP_CATEGORY.ARITHMETIC: self._generateArithmeticOp,
            OP_CATEGORY.LOGICAL: self._generateLogicalOp,
            OP_CATEGORY.COMPARISON: self._generateComparisonOp,
            OP_CATEGORY.SHIFT: self._generateShiftOp,
            OP_CATEGORY.MUX: self._generateMuxOp,
            OP_CATEGORY.CONCAT: self._generateConcatOp,
            OP_CATEGORY.REDUCTION: self._generateReductionOp,
        }
        dbg = self._dbg
        with dbg.scoped(RandNetlistGenerator._generateDatapath, None):
            for i in range(self.config.num_operations):
                cat = self._pickCategory()
                if cat is None:
                    dbg.log((i, "no operation category enabled"))
                    continue

                pool = signals.getAvailableSignals()
                if not pool:
                    pool = list(signals.inputs)

                op = generators[cat](pool)
                if op is None:
                    dbg.log((i, cat.name, "dropped"))
                else:
                    netlist.addOperation(op)
                    dbg.log((i, op))

    def _assignPipelineStages(self):
        """
        :note: depths are assigned later, so the stage is computed from the depth the operation has now
        """
        c = self.config
        for op in self.netlist.operations:
            op.pipelineStage = op.depth * c.num_pipeline_stages // c.max_depth

    def _connectOutputs(self):
        netlist = self.netlist
        pool = netlist.signals.getAvailableSignals()
        with self._dbg.scoped(RandNetlistGenerator._connectOutputs, None):
            for o in netlist.outputs:
                src = self._pickSignal(pool)
                if src is None:
                    self._dbg.log((o, "not connected, no signal available"))
                    continue
                c = RandNetOutputConnection(o, src)
                if c.isWidthCoerced():
                    self._dbg.log(("unchecked width coercion", o, src))
                netlist.addOutputConnection(c)

    def _assignDepths(self):
        maxDepth = self.config.max_depth
        for i, op in enumerate(self.netlist.operations):
            op.depth = i % maxDepth

    def _getDebugTracer(self, label: str):
        if self.config.verbose:
            return DebugTracer(sys.stdout), False
        elif self.platform is not None:
            return self.platform._getDebugTracer(label, RandNetlistDebugBundle.DBG_0_generatorTrace)
        else:
            return DebugTracer(None), False

    def generate(self) -> RandNetlistCtx:
        """
        Run all generation phases and return the generated netlist.
        Debug passes of the platform are executed on the result if platform is specified.
        """
        c = self.config
        netlist = self.netlist = RandNetlistCtx(c.module_name, self.platform)
        dbg, doCloseTrace = self._getDebugTracer(netlist.label)
        self._dbg = dbg
        try:
            with dbg.scoped(RandNetlistGenerator.generate, None):
                dbg.log(("seed", c.seed))
                self._generateInputs()
                self._generateOutputs()
                self._generateDatapath()
                if c.num_pipeline_stages > 0:
                    self._assignPipelineStages()
                RandNetlistControlFlowGenerator(self).generate()
                self._connectOutputs()
                self._assignDepths()
                if dbg.isEnabled():
                    dbg.log(f"{len(netlist.inputs):d} inputs, {len(netlist.outputs):d} outputs, "
                            f"{len(netlist.operations):d} operations, {len(netlist.controlBlocks):d} control blocks")
        finally:
            if doCloseTrace:
                dbg._out.close()
            self._dbg = DebugTracer(None)

        if self.platform is not None:
            self.platform.runRandNetlistPasses(netlist)

        return netlist
