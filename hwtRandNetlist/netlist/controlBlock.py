from typing import List, Optional, Tuple, Union

from hwt.pyUtils.setList import SetList
from hwtRandNetlist.netlist.operation import RandNetOperation
from hwtRandNetlist.netlist.signal import RandNetSignal, SIGNAL_ROLE

RegAssignment = Tuple[RandNetSignal, RandNetSignal]  # (dst register, src)


def _checkAssignment(dst: RandNetSignal, src: RandNetSignal):
    assert dst.role == SIGNAL_ROLE.REG, ("Control blocks may assign only to registers", dst, src)
    assert src.role != SIGNAL_ROLE.REG, ("Registers are never read in control blocks", dst, src)


class RandNetControlRegion():
    """
    A body of a single case item or branch.

    :ivar operations: operations evaluated in this region, their outputs are usually assigned to registers
    :ivar assignments: list of tuples (dst register, src signal)
    """

    def __init__(self):
        self.operations: List[RandNetOperation] = []
        self.assignments: List[RegAssignment] = []

    def addOperation(self, op: RandNetOperation):
        self.operations.append(op)

    def addAssignment(self, dst: RandNetSignal, src: RandNetSignal):
        _checkAssignment(dst, src)
        self.assignments.append((dst, src))

    def getWrittenSignals(self) -> SetList:
        return SetList(dst for dst, _ in self.assignments)


class RandNetCaseItem(RandNetControlRegion):
    """
    :ivar matchValue: the value of selector for which this item is active
    """

    def __init__(self, matchValue: int):
        RandNetControlRegion.__init__(self)
        self.matchValue = matchValue

    def __repr__(self):
        return f"<{self.__class__.__name__:s} {self.matchValue:d}>"


class RandNetBranch(RandNetControlRegion):
    """
    :ivar condition: the condition of this branch, None for the else branch
    """

    def __init__(self, condition: Optional[RandNetSignal]):
        RandNetControlRegion.__init__(self)
        self.condition = condition

    def isElse(self):
        return self.condition is None

    def __repr__(self):
        c = "else" if self.condition is None else self.condition.name
        return f"<{self.__class__.__name__:s} {c:s}>"


class RandNetCaseStatement():
    """
    A selector driven multi way choice. Each case item is mutually exclusive with any other
    and thus operations in separate items may share a single hardware resource.

    :ivar selector: the signal which value is matched against case item values
    :ivar cases: case items in the order of declaration
    :ivar defaultAssignments: assignments performed if no case item matches
    """

    def __init__(self, selector: RandNetSignal):
        self.selector = selector
        self.cases: List[RandNetCaseItem] = []
        self.defaultAssignments: List[RegAssignment] = []

    def addCase(self, matchValue: int) -> RandNetCaseItem:
        assert matchValue >= 0, matchValue
        assert matchValue < (1 << self.selector.width), ("Case value does not fit into selector", self.selector, matchValue)
        for c in self.cases:
            assert c.matchValue != matchValue, ("Duplicit case value", self, matchValue)
        c = RandNetCaseItem(matchValue)
        self.cases.append(c)
        return c

    def addCaseOperation(self, caseIndex: int, op: RandNetOperation):
        self.cases[caseIndex].addOperation(op)

    def addCaseAssignment(self, caseIndex: int, dst: RandNetSignal, src: RandNetSignal):
        self.cases[caseIndex].addAssignment(dst, src)

    def setDefaultCase(self, assignments: List[RegAssignment]):
        for dst, src in assignments:
            _checkAssignment(dst, src)
        self.defaultAssignments = list(assignments)

    def iterOperations(self):
        for c in self.cases:
            yield from c.operations

    def getWrittenSignals(self) -> SetList:
        res = SetList()
        for c in self.cases:
            res.extend(c.getWrittenSignals())
        res.extend(dst for dst, _ in self.defaultAssignments)
        return res

    def __repr__(self):
        return f"<{self.__class__.__name__:s} {self.selector.name:s} cases={len(self.cases):d}>"


class RandNetIfElseChain():
    """
    A priority chain of conditional branches, optionally terminated by else branch.

    :ivar branches: branches in priority order, only the last one may be an else
    """

    def __init__(self):
        self.branches: List[RandNetBranch] = []

    def hasElse(self):
        return bool(self.branches) and self.branches[-1].isElse()

    def addBranch(self, condition: Optional[RandNetSignal]) -> RandNetBranch:
        if self.hasElse():
            raise AssertionError("Can not add a branch after else branch", self, condition)
        b = RandNetBranch(condition)
        self.branches.append(b)
        return b

    def addElseBranch(self) -> RandNetBranch:
        return self.addBranch(None)

    def iterOperations(self):
        for b in self.branches:
            yield from b.operations

    def getWrittenSignals(self) -> SetList:
        res = SetList()
        for b in self.branches:
            res.extend(b.getWrittenSignals())
        return res

    def __repr__(self):
        return f"<{self.__class__.__name__:s} branches={len(self.branches):d}>"


RandNetControlBlock = Union[RandNetCaseStatement, RandNetIfElseChain]


class RandNetSharingGroup():
    """
    A set of operations which are meant to be evaluated under the same enable condition
    and which are a candidate for resource sharing.

    :ivar enable: the enable signal, it is not connected to any logic and serves only as a hint
    :ivar operations: the operations of this group (also present in the main operation list)
    """

    def __init__(self, enable: RandNetSignal):
        self.enable = enable
        self.operations: List[RandNetOperation] = []

    def addOperation(self, op: RandNetOperation):
        self.operations.append(op)

    def __repr__(self):
        return f"<{self.__class__.__name__:s} {self.enable.name:s} ops={[o._id for o in self.operations]}>"
