from typing import List, Callable

from hwtRandNetlist.netlist.signal import RandNetSignal, SIGNAL_ROLE


class RandNetSignalRegistry():
    """
    An append only store of all signals of a single generated netlist.

    :ivar inputs: input ports in declaration order
    :ivar outputs: output ports in declaration order
    :ivar wires: internal wires in declaration order
    :ivar regs: internal registers in declaration order
    :ivar _getUniqId: function which allocates a new unique index in parent netlist
    :ivar _internalNameCntr: counter used for names of wires and registers,
        shared by both so the names never collide

    :note: The order of signals in each list is the order of declaration in generated code.
    """

    def __init__(self, getUniqId: Callable[[], int]):
        self._getUniqId = getUniqId
        self.inputs: List[RandNetSignal] = []
        self.outputs: List[RandNetSignal] = []
        self.wires: List[RandNetSignal] = []
        self.regs: List[RandNetSignal] = []
        self._internalNameCntr = 0

    def _create(self, name: str, width: int, isSigned: bool, role: SIGNAL_ROLE, container: List[RandNetSignal]):
        assert width >= 1, ("Signal width must be at least 1", name, width)
        s = RandNetSignal(self._getUniqId(), name, RandNetSignal.dtypeFor(width, isSigned), role)
        container.append(s)
        return s

    def _getInternalName(self, prefix: str):
        n = self._internalNameCntr
        self._internalNameCntr += 1
        return f"{prefix:s}_{n:d}"

    def createInput(self, width: int, isSigned: bool=False) -> RandNetSignal:
        return self._create(f"in_{len(self.inputs):d}", width, isSigned, SIGNAL_ROLE.INPUT, self.inputs)

    def createOutput(self, width: int, isSigned: bool=False) -> RandNetSignal:
        return self._create(f"out_{len(self.outputs):d}", width, isSigned, SIGNAL_ROLE.OUTPUT, self.outputs)

    def createWire(self, width: int, isSigned: bool=False) -> RandNetSignal:
        return self._create(self._getInternalName("wire"), width, isSigned, SIGNAL_ROLE.WIRE, self.wires)

    def createReg(self, width: int, isSigned: bool=False) -> RandNetSignal:
        return self._create(self._getInternalName("reg"), width, isSigned, SIGNAL_ROLE.REG, self.regs)

    def getAvailableSignals(self) -> List[RandNetSignal]:
        """
        :returns: signals which can be used as an operand (inputs and wires created so far)
        :note: outputs and registers are never read by generated operations
        """
        return self.inputs + self.wires

    def iterAll(self):
        """
        :returns: iterator of all signals in declaration order (inputs, outputs, wires, registers)
        """
        yield from self.inputs
        yield from self.outputs
        yield from self.wires
        yield from self.regs

    def __len__(self):
        return len(self.inputs) + len(self.outputs) + len(self.wires) + len(self.regs)
