"""
hwtRandNetlist
==============

hwtRandNetlist is a generator of random hardware dataflow netlists used for stress-testing of hardware synthesis tools.
For a configuration and a seed it deterministically builds a graph of typed signals connected by operations
together with mutually exclusive control regions which create resource sharing opportunities for the tool under test.

* :mod:`hwtRandNetlist.netlist`: the netlist data model (signals, operations, control blocks)
  and analysis/translation passes working on it.

* :mod:`hwtRandNetlist.generator`: the generation engine which drives a seeded pseudo-random stream
  and fills the :class:`hwtRandNetlist.netlist.context.RandNetlistCtx`.

* :mod:`hwtRandNetlist.platform`: configuration of the generator and of its debug outputs.

* :mod:`hwtRandNetlist.cli`: command line interface which writes the Verilog module and optional testbench.
"""
