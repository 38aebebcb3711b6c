#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import argparse
from datetime import datetime
from pathlib import Path
import sys
from typing import Optional, List

from hwtRandNetlist.generator.generator import RandNetlistGenerator
from hwtRandNetlist.netlist.translation.toVerilog import RandNetlistToVerilog
from hwtRandNetlist.platform.config import RandNetlistConfig, RandNetlistConfigError
from hwtRandNetlist.platform.debugBundle import RandNetlistDebugBundle
from hwtRandNetlist.platform.platform import RandNetlistPlatform

__doc__ = """
Random Verilog datapath generator, a generator of random netlists for synthesis benchmarking.

Examples:
  hwtRandNetlist -n 100 -i 16 -O 8 -o large_datapath.v
  hwtRandNetlist -c my_config.txt -t
  hwtRandNetlist -s 12345 -n 200 -v
"""

# (option destination, config field)
_CONFIG_OVERRIDES = [
    ("output", "output_file"),
    ("module", "module_name"),
    ("num_ops", "num_operations"),
    ("inputs", "num_inputs"),
    ("outputs", "num_outputs"),
    ("seed", "seed"),
    ("depth", "max_depth"),
    ("pipeline", "num_pipeline_stages"),
]


def createArgParser():
    parser = argparse.ArgumentParser(prog="hwtRandNetlist", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('-c', '--config', type=str, help="Load configuration from file")
    parser.add_argument('-o', '--output', type=str, help="Output Verilog file (default: output.v)")
    parser.add_argument('-m', '--module', type=str, help="Module name (default: random_datapath)")
    parser.add_argument('-n', '--num-ops', type=int, help="Number of operations (default: 50)")
    parser.add_argument('-i', '--inputs', type=int, help="Number of inputs (default: 8)")
    parser.add_argument('-O', '--outputs', type=int, help="Number of outputs (default: 4)")
    parser.add_argument('-s', '--seed', type=int, help="Random seed (default: random)")
    parser.add_argument('-d', '--depth', type=int, help="Maximum logic depth (default: 10)")
    parser.add_argument('-p', '--pipeline', type=int, help="Number of pipeline stages (default: 0)")
    parser.add_argument('-t', '--testbench', action='store_true', help="Generate testbench")
    parser.add_argument('-v', '--verbose', action='store_true', help="Verbose output")
    parser.add_argument('--debug-dir', type=str, help="Directory where debug dumps of the netlist are stored")
    parser.add_argument('--no-timestamp', action='store_true', help="Do not put generation time in to output files")
    return parser


def configFromArgs(args: argparse.Namespace) -> RandNetlistConfig:
    """
    :raise RandNetlistConfigError: if the configuration file is invalid or if the resulting configuration is invalid
    """
    config = RandNetlistConfig()
    if args.config is not None:
        config.loadFromFile(args.config)

    for argName, fieldName in _CONFIG_OVERRIDES:
        v = getattr(args, argName)
        if v is not None:
            setattr(config, fieldName, v)
    if args.testbench:
        config.generate_testbench = True
    if args.verbose:
        config.verbose = True

    config.validate()
    return config


def main(argv: Optional[List[str]]=None) -> int:
    args = createArgParser().parse_args(argv)
    try:
        config = configFromArgs(args)
    except RandNetlistConfigError as e:
        msg = " ".join(str(a) for a in e.args)
        print(f"Error: {msg:s}", file=sys.stderr)
        return 1

    if args.debug_dir is not None:
        platform = RandNetlistPlatform(args.debug_dir, RandNetlistDebugBundle.ALL_RELIABLE)
    else:
        platform = None

    gen = RandNetlistGenerator(config, platform)
    if config.verbose:
        print(config.toText(), end="")

    netlist = gen.generate()
    timestamp = None if args.no_timestamp else datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    toVerilog = RandNetlistToVerilog(netlist, timestamp)

    outFileName = Path(config.output_file)
    try:
        with open(outFileName, "w") as f:
            toVerilog.emit(f)
    except OSError as e:
        print(f"Error: Could not open output file: {outFileName} ({e.strerror})", file=sys.stderr)
        return 1
    print(f"Successfully generated: {outFileName}")

    if config.generate_testbench:
        tbFileName = outFileName.parent / ("tb_" + outFileName.name)
        try:
            with open(tbFileName, "w") as f:
                toVerilog.emitTestbench(f)
        except OSError as e:
            print(f"Warning: Could not create testbench file: {tbFileName} ({e.strerror})", file=sys.stderr)
        else:
            print(f"Successfully generated testbench: {tbFileName}")

    if config.verbose:
        print(f"\nGeneration complete!\n"
              f"To synthesize with yosys:\n"
              f"  yosys -p 'synth -top {config.module_name:s}' {outFileName}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
