from enum import Enum

from hwt.hdl.types.bits import HBits


class SIGNAL_ROLE(Enum):
    INPUT, OUTPUT, WIRE, REG = range(4)


class RandNetSignal():
    """
    A named value of a specific bit width in generated netlist.

    :ivar _id: unique index of this object in parent netlist (the order of creation)
    :ivar name: name of the signal in generated code
    :ivar _dtype: type of the signal, :class:`hwt.hdl.types.bits.HBits` instance
    :ivar role: specifies if this is a port of the module or an internal wire/register

    :note: Signals are immutable and they are only referenced by operations and control blocks.
    """
    __slots__ = ["_id", "name", "_dtype", "role"]

    def __init__(self, _id: int, name: str, dtype: HBits, role: SIGNAL_ROLE):
        assert isinstance(dtype, HBits), dtype
        assert dtype.bit_length() >= 1, ("Signal must have at least 1 bit", name, dtype)
        self._id = _id
        self.name = name
        self._dtype = dtype
        self.role = role

    @staticmethod
    def dtypeFor(width: int, isSigned: bool) -> HBits:
        """
        :returns: type for signal of specified width and signedness
            (unsigned signals are represented by plain bit vectors)
        """
        return HBits(width, signed=True if isSigned else None)

    @property
    def width(self) -> int:
        return self._dtype.bit_length()

    @property
    def isSigned(self) -> bool:
        return bool(self._dtype.signed)

    def __repr__(self):
        s = "s" if self.isSigned else "u"
        return f"<{self.__class__.__name__:s} {self._id:d} {self.role.name:s} {self.name:s} {s:s}{self.width:d}>"
