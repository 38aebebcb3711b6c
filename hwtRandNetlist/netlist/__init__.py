"""
RandNetlist is the result of a single generation run. It is composed of signals
(:mod:`hwtRandNetlist.netlist.signal`), operations (:mod:`hwtRandNetlist.netlist.operation`)
and control blocks (:mod:`hwtRandNetlist.netlist.controlBlock`) stored in :class:`hwtRandNetlist.netlist.context.RandNetlistCtx`.

All objects are append only. Operations and control blocks only reference signals, the signals themselves
are owned by :class:`hwtRandNetlist.netlist.signalRegistry.RandNetSignalRegistry`.
"""
