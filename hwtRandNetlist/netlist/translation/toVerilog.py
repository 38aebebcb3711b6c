from io import StringIO
from typing import Optional, Dict, List

from hwtRandNetlist.netlist.context import RandNetlistCtx, RandNetOutputConnection
from hwtRandNetlist.netlist.controlBlock import RandNetCaseStatement, RandNetIfElseChain, \
    RandNetControlRegion, RandNetSharingGroup
from hwtRandNetlist.netlist.opKind import OP_KIND
from hwtRandNetlist.netlist.operation import RandNetOperation
from hwtRandNetlist.netlist.signal import RandNetSignal, SIGNAL_ROLE

_BINARY_OPS: Dict[OP_KIND, str] = {
    OP_KIND.ADD: "+",
    OP_KIND.SUB: "-",
    OP_KIND.MUL: "*",
    OP_KIND.DIV: "/",
    OP_KIND.MOD: "%",
    OP_KIND.AND: "&",
    OP_KIND.OR: "|",
    OP_KIND.XOR: "^",
    OP_KIND.EQ: "==",
    OP_KIND.NE: "!=",
    OP_KIND.LT: "<",
    OP_KIND.GT: ">",
    OP_KIND.LE: "<=",
    OP_KIND.GE: ">=",
    OP_KIND.SHL: "<<",
    OP_KIND.SHR: ">>",
    OP_KIND.ASHR: ">>>",
}
# negated bitwise operators
_NEG_BINARY_OPS: Dict[OP_KIND, str] = {
    OP_KIND.NAND: "&",
    OP_KIND.NOR: "|",
    OP_KIND.XNOR: "^",
}
_UNARY_OPS: Dict[OP_KIND, str] = {
    OP_KIND.NOT: "~",
    OP_KIND.RED_AND: "&",
    OP_KIND.RED_OR: "|",
    OP_KIND.RED_XOR: "^",
    OP_KIND.RED_NAND: "~&",
    OP_KIND.RED_NOR: "~|",
    OP_KIND.RED_XNOR: "~^",
}

HEADER_LINE = "// " + "=" * 76
SECTION_LINE = "    // " + "=" * 40
INDENT = "    "


class RandNetlistToVerilog():
    """
    Render a finished netlist as a Verilog module and an optional testbench for it.

    :ivar netlist: the netlist to render, it is not modified
    :ivar timestamp: optional time of generation which is added to header comment
    """

    def __init__(self, netlist: RandNetlistCtx, timestamp: Optional[str]=None):
        self.netlist = netlist
        self.timestamp = timestamp

    @staticmethod
    def _typeDecl(s: RandNetSignal):
        res = []
        if s.isSigned:
            res.append("signed ")
        if s.width > 1:
            res.append(f"[{s.width - 1:d}:0] ")
        return "".join(res)

    @classmethod
    def getSignalDeclaration(cls, s: RandNetSignal) -> str:
        if s.role == SIGNAL_ROLE.INPUT:
            kw = "input"
        elif s.role == SIGNAL_ROLE.OUTPUT:
            kw = "output"
        elif s.role == SIGNAL_ROLE.WIRE:
            kw = "wire"
        else:
            assert s.role == SIGNAL_ROLE.REG, s
            kw = "reg"
        return f"{kw:s} {cls._typeDecl(s):s}{s.name:s}"

    @staticmethod
    def getExpression(op: RandNetOperation) -> str:
        k = op.kind
        ops = [o.name for o in op.operands]
        binOp = _BINARY_OPS.get(k)
        if binOp is not None:
            a, b = ops
            return f"({a:s} {binOp:s} {b:s})"

        binOp = _NEG_BINARY_OPS.get(k)
        if binOp is not None:
            a, b = ops
            return f"~({a:s} {binOp:s} {b:s})"

        unOp = _UNARY_OPS.get(k)
        if unOp is not None:
            a, = ops
            return f"({unOp:s}{a:s})"

        if k in (OP_KIND.MUX2, OP_KIND.CONDITIONAL):
            sel, a, b = ops
            return f"({sel:s} ? {a:s} : {b:s})"
        elif k == OP_KIND.MUX4:
            sel, d0, d1, d2, d3 = ops
            return f"({sel:s}[1] ? ({sel:s}[0] ? {d3:s} : {d2:s}) : ({sel:s}[0] ? {d1:s} : {d0:s}))"
        elif k == OP_KIND.CONCAT:
            return "{" + ", ".join(ops) + "}"
        else:
            raise NotImplementedError(k)

    @classmethod
    def getAssignment(cls, op: RandNetOperation) -> str:
        return f"assign {op.output.name:s} = {cls.getExpression(op):s};"

    def _emitHeader(self, out: StringIO, title: str):
        out.write(HEADER_LINE + "\n")
        out.write(f"// {title:s}\n")
        if self.timestamp is not None:
            out.write(f"// Generated: {self.timestamp:s}\n")
        out.write(HEADER_LINE + "\n")

    def _emitPortList(self, out: StringIO):
        netlist = self.netlist
        out.write(f"module {netlist.label:s} (\n")
        ports = [*netlist.inputs, *netlist.outputs]
        for i, p in enumerate(ports):
            sep = "," if i < len(ports) - 1 else ""
            out.write(f"{INDENT:s}{self.getSignalDeclaration(p):s}{sep:s}\n")
        out.write(");\n\n")

    def _emitDeclarations(self, out: StringIO):
        netlist = self.netlist
        for title, signals in (("Internal wires", netlist.wires), ("Registers", netlist.regs)):
            if signals:
                out.write(f"{INDENT:s}// {title:s}\n")
                for s in signals:
                    out.write(f"{INDENT:s}{self.getSignalDeclaration(s):s};\n")
                out.write("\n")

    def _emitSection(self, out: StringIO, title: str):
        out.write(SECTION_LINE + "\n")
        out.write(f"{INDENT:s}// {title:s}\n")
        out.write(SECTION_LINE + "\n\n")

    def _emitDatapath(self, out: StringIO):
        ops = self.netlist.operations
        if not ops:
            out.write(f"{INDENT:s}// No operations generated\n\n")
            return

        self._emitSection(out, "Combinational Logic")
        for op in ops:
            out.write(f"{INDENT:s}{self.getAssignment(op):s}  // depth={op.depth:d} stage={op.pipelineStage:d}\n")
        out.write("\n")

    @staticmethod
    def _emitRegionBody(out: StringIO, region: RandNetControlRegion, indent: str):
        for dst, src in region.assignments:
            out.write(f"{indent:s}{dst.name:s} = {src.name:s};\n")

    def _emitCaseStatement(self, out: StringIO, b: RandNetCaseStatement):
        i1 = INDENT * 2
        i2 = INDENT * 3
        i3 = INDENT * 4
        out.write(f"{INDENT:s}always @(*) begin\n")
        out.write(f"{i1:s}case ({b.selector.name:s})\n")
        # sized unsigned item values make the whole case comparison unsigned even for a signed selector
        selWidth = b.selector.width
        for c in b.cases:
            out.write(f"{i2:s}{selWidth:d}'d{c.matchValue:d}: begin\n")
            self._emitRegionBody(out, c, i3)
            out.write(f"{i2:s}end\n")
        if b.defaultAssignments:
            out.write(f"{i2:s}default: begin\n")
            for dst, src in b.defaultAssignments:
                out.write(f"{i3:s}{dst.name:s} = {src.name:s};\n")
            out.write(f"{i2:s}end\n")
        out.write(f"{i1:s}endcase\n")
        out.write(f"{INDENT:s}end\n")

    def _emitIfElseChain(self, out: StringIO, b: RandNetIfElseChain):
        i1 = INDENT * 2
        i2 = INDENT * 3
        out.write(f"{INDENT:s}always @(*) begin\n")
        for i, br in enumerate(b.branches):
            if br.isElse():
                head = "end else begin" if i else "begin"
            elif i == 0:
                head = f"if ({br.condition.name:s}) begin"
            else:
                head = f"end else if ({br.condition.name:s}) begin"
            out.write(f"{i1:s}{head:s}\n")
            self._emitRegionBody(out, br, i2)
        if b.branches:
            out.write(f"{i1:s}end\n")
        out.write(f"{INDENT:s}end\n")

    def _emitControlBlocks(self, out: StringIO):
        blocks = self.netlist.controlBlocks
        if not blocks:
            return

        self._emitSection(out, "Control Flow Structures")
        for b in blocks:
            # operations of the regions are continuous assignments, the always block only selects the result
            for op in b.iterOperations():
                out.write(f"{INDENT:s}{self.getAssignment(op):s}\n")
            if isinstance(b, RandNetCaseStatement):
                self._emitCaseStatement(out, b)
            else:
                assert isinstance(b, RandNetIfElseChain), b
                self._emitIfElseChain(out, b)
            out.write("\n")

    def _emitSharingGroups(self, out: StringIO):
        groups = self.netlist.sharingGroups
        if not groups:
            return

        self._emitSection(out, "Resource Sharing Opportunities")
        for i, g in enumerate(groups):
            g: RandNetSharingGroup
            ops = ", ".join(f"{op.output.name:s}({op.kind.name:s})" for op in g.operations)
            out.write(f"{INDENT:s}// group {i:d} enable={g.enable.name:s}: {ops:s}\n")
        out.write("\n")

    @staticmethod
    def getOutputAssignment(c: RandNetOutputConnection) -> str:
        res = f"assign {c.output.name:s} = {c.source.name:s};"
        if c.isWidthCoerced():
            res += f"  // unchecked width coercion {c.source.width:d} -> {c.output.width:d}"
        return res

    def _emitOutputConnections(self, out: StringIO):
        conns = self.netlist.outputConnections
        if not conns:
            return
        self._emitSection(out, "Outputs")
        for c in conns:
            out.write(f"{INDENT:s}{self.getOutputAssignment(c):s}\n")
        out.write("\n")

    def emit(self, out: StringIO):
        netlist = self.netlist
        self._emitHeader(out, "Random Verilog Datapath Generator")
        out.write("// This file was automatically generated for synthesis tool benchmarking.\n")
        out.write(f"// Module: {netlist.label:s}\n")
        out.write(f"// Inputs: {len(netlist.inputs):d}\n")
        out.write(f"// Outputs: {len(netlist.outputs):d}\n")
        out.write(f"// Operations: {len(netlist.operations):d}\n")
        out.write(HEADER_LINE + "\n\n")

        self._emitPortList(out)
        self._emitDeclarations(out)
        self._emitDatapath(out)
        self._emitControlBlocks(out)
        self._emitSharingGroups(out)
        self._emitOutputConnections(out)
        out.write("endmodule\n")

    def emitTestbench(self, out: StringIO, vectorCnt: int=100):
        netlist = self.netlist
        name = netlist.label
        inputs = netlist.inputs
        outputs = netlist.outputs
        self._emitHeader(out, f"Testbench for {name:s}")
        out.write("\n`timescale 1ns / 1ps\n\n")
        out.write(f"module tb_{name:s};\n\n")

        out.write(f"{INDENT:s}// Testbench signals\n")
        for i in inputs:
            out.write(f"{INDENT:s}reg {self._typeDecl(i):s}{i.name:s};\n")
        for o in outputs:
            out.write(f"{INDENT:s}wire {self._typeDecl(o):s}{o.name:s};\n")

        out.write(f"\n{INDENT:s}// Instantiate DUT\n")
        out.write(f"{INDENT:s}{name:s} dut (\n")
        ports: List[RandNetSignal] = [*inputs, *outputs]
        for i, p in enumerate(ports):
            sep = "," if i < len(ports) - 1 else ""
            out.write(f"{INDENT * 2:s}.{p.name:s}({p.name:s}){sep:s}\n")
        out.write(f"{INDENT:s});\n\n")

        i1 = INDENT * 2
        i2 = INDENT * 3
        out.write(f"{INDENT:s}// Test stimulus\n")
        out.write(f"{INDENT:s}initial begin\n")
        out.write(f'{i1:s}$dumpfile("{name:s}.vcd");\n')
        out.write(f"{i1:s}$dumpvars(0, tb_{name:s});\n\n")
        out.write(f"{i1:s}// Initialize inputs\n")
        for i in inputs:
            out.write(f"{i1:s}{i.name:s} = 0;\n")
        out.write(f"\n{i1:s}// Apply random test vectors\n")
        out.write(f"{i1:s}repeat ({vectorCnt:d}) begin\n")
        out.write(f"{i2:s}#10;\n")
        for i in inputs:
            out.write(f"{i2:s}{i.name:s} = $random;\n")
        out.write(f"{i1:s}end\n\n")
        out.write(f"{i1:s}#100 $finish;\n")
        out.write(f"{INDENT:s}end\n\n")

        out.write(f"{INDENT:s}// Monitor outputs\n")
        out.write(f"{INDENT:s}initial begin\n")
        fmt = "".join(f" {o.name:s}=%h" for o in outputs)
        args = "".join(f", {o.name:s}" for o in outputs)
        out.write(f'{i1:s}$monitor("Time=%0t{fmt:s}", $time{args:s});\n')
        out.write(f"{INDENT:s}end\n\n")
        out.write("endmodule\n")
