from io import StringIO
from pathlib import Path
import sys
from typing import Optional, Union, Dict, Type


class RandNetlistConfigError(ValueError):
    """
    Raised if the configuration of the generator is invalid or if the configuration file is malformed.
    """
    pass


def _parseBool(v: str):
    return v == "true" or v == "1"


class RandNetlistConfig():
    """
    Configuration of :class:`hwtRandNetlist.generator.generator.RandNetlistGenerator`.

    :ivar seed: seed of the pseudo random number generator, None means that the seed is generated
        when generator is constructed (the resolved value is stored back into this object)
    :ivar module_name: name of the generated module
    :ivar num_inputs: number of input ports
    :ivar num_outputs: number of output ports
    :ivar input_width_min: inclusive bound for the width of input ports and control block registers
    :ivar input_width_max: inclusive bound for the width of input ports and control block registers
    :ivar output_width_min: inclusive bound for the width of output ports
    :ivar output_width_max: inclusive bound for the width of output ports
    :ivar num_operations: number of attempts to generate a datapath operation
    :ivar max_depth: number of depth labels, the depth of operation is its index modulo this value
    :ivar num_pipeline_stages: if > 0 operations are tagged with pipeline stage
    :ivar weight_*: unnormalized weights of operation categories and of kinds in arithmetic
        and shift category, category with weight <= 0 is never generated
    :ivar use_signed: if True the signedness of ports and control block registers is randomized
    :ivar generate_case_statements: generate case statements even if num_case_statements is 0
    :ivar generate_if_else_chains: generate if/else chains even if num_if_else_chains is 0
    :ivar generate_sharing_opportunities: fill control blocks with arithmetic operations and generate sharing groups
    :ivar num_case_statements: number of case statements (if 0 and enabled, 2 are generated)
    :ivar num_if_else_chains: number of if/else chains (if 0 and enabled, 2 are generated)
    :ivar cases_per_statement: maximum number of case items in a case statement
    :ivar generate_testbench: also generate a testbench next to the output file
    :ivar output_file: path of the output Verilog file
    :ivar verbose: print generation trace and configuration summary to stdout
    """
    _FIELD_TYPES: Dict[str, Type] = {
        "seed": int,
        "module_name": str,
        "num_inputs": int,
        "num_outputs": int,
        "input_width_min": int,
        "input_width_max": int,
        "output_width_min": int,
        "output_width_max": int,
        "num_operations": int,
        "max_depth": int,
        "num_pipeline_stages": int,
        "weight_arithmetic": float,
        "weight_logical": float,
        "weight_comparison": float,
        "weight_shift": float,
        "weight_mux": float,
        "weight_concat": float,
        "weight_reduction": float,
        "weight_add": float,
        "weight_sub": float,
        "weight_mult": float,
        "weight_div": float,
        "weight_mod": float,
        "weight_sll": float,
        "weight_srl": float,
        "weight_sra": float,
        "use_signed": bool,
        "generate_case_statements": bool,
        "generate_if_else_chains": bool,
        "generate_sharing_opportunities": bool,
        "num_case_statements": int,
        "num_if_else_chains": int,
        "cases_per_statement": int,
        "generate_testbench": bool,
        "output_file": str,
        "verbose": bool,
    }
    CATEGORY_WEIGHT_NAMES = ("weight_arithmetic", "weight_logical", "weight_comparison",
                             "weight_shift", "weight_mux", "weight_concat", "weight_reduction")
    ARITHMETIC_WEIGHT_NAMES = ("weight_add", "weight_sub", "weight_mult", "weight_div", "weight_mod")
    SHIFT_WEIGHT_NAMES = ("weight_sll", "weight_srl", "weight_sra")
    MAX_PORT_CNT = 1000

    def __init__(self, **kwargs):
        self.seed: Optional[int] = None
        self.module_name = "random_datapath"
        self.num_inputs = 8
        self.num_outputs = 4
        self.input_width_min = 8
        self.input_width_max = 32
        self.output_width_min = 8
        self.output_width_max = 32
        self.num_operations = 50
        self.max_depth = 10
        self.num_pipeline_stages = 0

        self.weight_arithmetic = 0.3
        self.weight_logical = 0.2
        self.weight_comparison = 0.1
        self.weight_shift = 0.15
        self.weight_mux = 0.15
        self.weight_concat = 0.05
        self.weight_reduction = 0.05

        self.weight_add = 0.3
        self.weight_sub = 0.3
        self.weight_mult = 0.25
        self.weight_div = 0.1
        self.weight_mod = 0.05

        self.weight_sll = 0.4
        self.weight_srl = 0.4
        self.weight_sra = 0.2

        self.use_signed = True
        self.generate_case_statements = False
        self.generate_if_else_chains = False
        self.generate_sharing_opportunities = False
        self.num_case_statements = 0
        self.num_if_else_chains = 0
        self.cases_per_statement = 4

        self.generate_testbench = False
        self.output_file = "output.v"
        self.verbose = False

        for k, v in kwargs.items():
            if k not in self._FIELD_TYPES:
                raise TypeError("Unknown configuration option", k)
            setattr(self, k, v)

    def setFromText(self, key: str, value: str):
        """
        Set a configuration field from its textual representation.

        :raise KeyError: if key is not a name of configuration field
        :raise ValueError: if value can not be converted to type of the field
        """
        t = self._FIELD_TYPES[key]
        if t is bool:
            v = _parseBool(value)
        else:
            v = t(value)
        setattr(self, key, v)

    def loadFromFile(self, fileName: Union[str, Path], warnOut: Optional[StringIO]=sys.stderr):
        """
        Load "key = value" lines from the file, empty lines and lines starting with # are ignored.
        The configuration is validated after load.

        :param warnOut: stream where warnings about unknown keys are written (None to suppress)
        :raise RandNetlistConfigError: if the file can not be read, contains a malformed value
            or if the resulting configuration is invalid
        """
        try:
            with open(fileName) as f:
                lines = f.readlines()
        except OSError as e:
            raise RandNetlistConfigError(f"Could not open config file: {fileName}") from e

        for lineNo, line in enumerate(lines, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            key = key.strip()
            value = value.strip()
            if not sep or key not in self._FIELD_TYPES:
                if warnOut is not None:
                    warnOut.write(f"Warning: Unknown config key '{key:s}' at line {lineNo:d}\n")
                continue

            try:
                self.setFromText(key, value)
            except ValueError as e:
                raise RandNetlistConfigError(f"Error parsing line {lineNo:d}: {e}") from e

        self.validate()

    def validate(self):
        """
        :raise RandNetlistConfigError: if the configuration is invalid
        """
        if not (1 <= self.num_inputs <= self.MAX_PORT_CNT):
            raise RandNetlistConfigError(f"num_inputs must be between 1 and {self.MAX_PORT_CNT:d}", self.num_inputs)
        if not (1 <= self.num_outputs <= self.MAX_PORT_CNT):
            raise RandNetlistConfigError(f"num_outputs must be between 1 and {self.MAX_PORT_CNT:d}", self.num_outputs)
        if self.input_width_min < 1 or self.input_width_min > self.input_width_max:
            raise RandNetlistConfigError("Invalid input width range", self.input_width_min, self.input_width_max)
        if self.output_width_min < 1 or self.output_width_min > self.output_width_max:
            raise RandNetlistConfigError("Invalid output width range", self.output_width_min, self.output_width_max)
        if self.num_operations < 1:
            raise RandNetlistConfigError("num_operations must be at least 1", self.num_operations)
        if self.max_depth < 1:
            raise RandNetlistConfigError("max_depth must be at least 1", self.max_depth)
        for name in ("num_pipeline_stages", "num_case_statements", "num_if_else_chains"):
            v = getattr(self, name)
            if v < 0:
                raise RandNetlistConfigError(f"{name:s} must not be negative", v)
        if self.cases_per_statement < 1:
            raise RandNetlistConfigError("cases_per_statement must be at least 1", self.cases_per_statement)

        if not any(getattr(self, name) > 0 for name in self.CATEGORY_WEIGHT_NAMES):
            raise RandNetlistConfigError("At least one operation category weight must be positive")
        for names in (self.ARITHMETIC_WEIGHT_NAMES, self.SHIFT_WEIGHT_NAMES):
            weights = [getattr(self, name) for name in names]
            for name, w in zip(names, weights):
                if w < 0:
                    raise RandNetlistConfigError(f"{name:s} must not be negative", w)
            if sum(weights) <= 0:
                raise RandNetlistConfigError("Total weight must be positive", names)

    def toText(self) -> str:
        return "\n".join([
            "=== Generator Configuration ===",
            f"Seed: {self.seed}",
            f"Module: {self.module_name:s}",
            f"Inputs: {self.num_inputs:d} (width: {self.input_width_min:d}-{self.input_width_max:d})",
            f"Outputs: {self.num_outputs:d} (width: {self.output_width_min:d}-{self.output_width_max:d})",
            f"Operations: {self.num_operations:d}",
            f"Max depth: {self.max_depth:d}",
            f"Pipeline stages: {self.num_pipeline_stages:d}",
            f"Output file: {self.output_file:s}",
            "================================",
        ]) + "\n"
