"""
The generation engine, :class:`hwtRandNetlist.generator.generator.RandNetlistGenerator` builds the datapath,
:mod:`hwtRandNetlist.generator.controlFlow` adds the mutually exclusive control regions.

All random decisions are taken from a single :class:`random.Random` instance seeded by the configuration
and the order of draws is fixed, so the same configuration always produces the same netlist.
"""
