from enum import Enum
from typing import Sequence, Tuple, Dict, Callable

from hwtRandNetlist.netlist.signal import RandNetSignal


class OP_KIND(Enum):
    """
    Closed set of operation kinds which can appear in generated netlist.
    """
    ADD, SUB, MUL, DIV, MOD, \
        AND, OR, XOR, NOT, NAND, NOR, XNOR, \
        EQ, NE, LT, GT, LE, GE, \
        SHL, SHR, ASHR, \
        RED_AND, RED_OR, RED_XOR, RED_NAND, RED_NOR, RED_XNOR, \
        MUX2, MUX4, CONCAT, CONDITIONAL = range(31)


ARITHMETIC_OPS = (OP_KIND.ADD, OP_KIND.SUB, OP_KIND.MUL, OP_KIND.DIV, OP_KIND.MOD)
LOGICAL_OPS = (OP_KIND.AND, OP_KIND.OR, OP_KIND.XOR, OP_KIND.NOT, OP_KIND.NAND, OP_KIND.NOR, OP_KIND.XNOR)
COMPARE_OPS = (OP_KIND.EQ, OP_KIND.NE, OP_KIND.LT, OP_KIND.GT, OP_KIND.LE, OP_KIND.GE)
SHIFT_OPS = (OP_KIND.SHL, OP_KIND.SHR, OP_KIND.ASHR)
REDUCTION_OPS = (OP_KIND.RED_AND, OP_KIND.RED_OR, OP_KIND.RED_XOR, OP_KIND.RED_NAND, OP_KIND.RED_NOR, OP_KIND.RED_XNOR)
MUX_OPS = (OP_KIND.MUX2, OP_KIND.MUX4)

# :note: CONCAT is the only operator with variable number of operands, the value is a minimum
OP_ARITY: Dict[OP_KIND, int] = {
    **{k: 2 for k in ARITHMETIC_OPS},
    **{k: 2 for k in LOGICAL_OPS},
    OP_KIND.NOT: 1,
    **{k: 2 for k in COMPARE_OPS},
    **{k: 2 for k in SHIFT_OPS},
    **{k: 1 for k in REDUCTION_OPS},
    OP_KIND.MUX2: 3,
    OP_KIND.MUX4: 5,  # 1 select + 4 data
    OP_KIND.CONCAT: 2,
    OP_KIND.CONDITIONAL: 3,
}


def opKindCheckArity(kind: OP_KIND, operandCnt: int) -> bool:
    required = OP_ARITY[kind]
    if kind is OP_KIND.CONCAT:
        return operandCnt >= required
    else:
        return operandCnt == required


OutputTypeInfo = Tuple[int, bool]  # (width, isSigned)


def _inferMaxWidthSignOr(a: RandNetSignal, b: RandNetSignal) -> OutputTypeInfo:
    return max(a.width, b.width), a.isSigned or b.isSigned


def _inferMul(a: RandNetSignal, b: RandNetSignal) -> OutputTypeInfo:
    return a.width + b.width, a.isSigned or b.isSigned


def _inferBitwise(a: RandNetSignal, b: RandNetSignal) -> OutputTypeInfo:
    return max(a.width, b.width), False


def _inferSameAsFirst(a: RandNetSignal, *_) -> OutputTypeInfo:
    return a.width, a.isSigned


def _inferBit(*_) -> OutputTypeInfo:
    return 1, False


def _inferMux2(sel: RandNetSignal, a: RandNetSignal, b: RandNetSignal) -> OutputTypeInfo:
    return max(a.width, b.width), a.isSigned or b.isSigned


def _inferMux4(sel: RandNetSignal, d0: RandNetSignal, *_) -> OutputTypeInfo:
    return d0.width, False


def _inferConcat(*operands: RandNetSignal) -> OutputTypeInfo:
    return sum(o.width for o in operands), False


_OP_OUTPUT_TYPE_INFER: Dict[OP_KIND, Callable[..., OutputTypeInfo]] = {
    OP_KIND.ADD: _inferMaxWidthSignOr,
    OP_KIND.SUB: _inferMaxWidthSignOr,
    OP_KIND.MUL: _inferMul,
    OP_KIND.DIV: _inferMaxWidthSignOr,
    OP_KIND.MOD: _inferMaxWidthSignOr,
    OP_KIND.AND: _inferBitwise,
    OP_KIND.OR: _inferBitwise,
    OP_KIND.XOR: _inferBitwise,
    OP_KIND.NAND: _inferBitwise,
    OP_KIND.NOR: _inferBitwise,
    OP_KIND.XNOR: _inferBitwise,
    OP_KIND.NOT: _inferSameAsFirst,
    **{k: _inferBit for k in COMPARE_OPS},
    # the type of shift result is the type of shifted operand, the shift amount does not matter
    **{k: _inferSameAsFirst for k in SHIFT_OPS},
    **{k: _inferBit for k in REDUCTION_OPS},
    OP_KIND.MUX2: _inferMux2,
    OP_KIND.CONDITIONAL: _inferMux2,
    OP_KIND.MUX4: _inferMux4,
    OP_KIND.CONCAT: _inferConcat,
}


def opKindInferOutputType(kind: OP_KIND, operands: Sequence[RandNetSignal]) -> OutputTypeInfo:
    """
    :returns: tuple (width, isSigned) of the result of operation of specified kind
    """
    assert opKindCheckArity(kind, len(operands)), ("Wrong number of operands", kind, operands)
    return _OP_OUTPUT_TYPE_INFER[kind](*operands)
