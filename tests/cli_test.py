#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from contextlib import redirect_stdout, redirect_stderr
from io import StringIO
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest

from hwtRandNetlist.cli import main, createArgParser, configFromArgs


class RandNetlistCli_TC(unittest.TestCase):

    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmpDir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _main(self, *args):
        out = StringIO()
        err = StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            ret = main(list(args))
        return ret, out.getvalue(), err.getvalue()

    def _read(self, fileName):
        with open(self.tmpDir / fileName) as f:
            return f.read()

    def test_configFromArgs(self):
        configFile = self.tmpDir / "cfg.txt"
        with open(configFile, "w") as f:
            f.write("num_inputs = 5\nnum_outputs = 6\n")
        args = createArgParser().parse_args(["-c", str(configFile), "-O", "2", "-s", "9", "-t"])
        c = configFromArgs(args)
        self.assertEqual(c.num_inputs, 5)
        self.assertEqual(c.num_outputs, 2)
        self.assertEqual(c.seed, 9)
        self.assertTrue(c.generate_testbench)
        self.assertFalse(c.verbose)

    def test_generate(self):
        outFile = self.tmpDir / "dp.v"
        ret, out, err = self._main("-o", str(outFile), "-s", "1", "-n", "20", "-m", "dp", "--no-timestamp")
        self.assertEqual(ret, 0, err)
        self.assertEqual(out, f"Successfully generated: {outFile}\n")
        v = self._read("dp.v")
        self.assertIn("module dp (\n", v)
        self.assertNotIn("Generated:", v)
        self.assertFalse((self.tmpDir / "tb_dp.v").exists())

        ret, _, _ = self._main("-o", str(self.tmpDir / "dp2.v"), "-s", "1", "-n", "20", "-m", "dp", "--no-timestamp")
        self.assertEqual(ret, 0)
        self.assertEqual(self._read("dp2.v"), v)

    def test_timestamp(self):
        outFile = self.tmpDir / "dp.v"
        ret, _, _ = self._main("-o", str(outFile), "-s", "1")
        self.assertEqual(ret, 0)
        self.assertIn("// Generated: ", self._read("dp.v"))

    def test_testbench(self):
        outFile = self.tmpDir / "top.v"
        ret, out, _ = self._main("-o", str(outFile), "-m", "top", "-t", "-i", "3", "-O", "2")
        self.assertEqual(ret, 0)
        self.assertIn(f"Successfully generated testbench: {self.tmpDir / 'tb_top.v'}\n", out)
        tb = self._read("tb_top.v")
        self.assertIn("module tb_top;\n", tb)
        self.assertIn("top dut (\n", tb)

    def test_verbose(self):
        outFile = self.tmpDir / "v.v"
        ret, out, _ = self._main("-o", str(outFile), "-s", "4", "-v")
        self.assertEqual(ret, 0)
        self.assertIn("=== Generator Configuration ===\n", out)
        self.assertIn("Seed: 4\n", out)
        self.assertIn("RandNetlistGenerator.generate:", out)
        self.assertIn("Generation complete!", out)

    def test_invalidConfig(self):
        ret, out, err = self._main("-o", str(self.tmpDir / "x.v"), "-i", "0")
        self.assertEqual(ret, 1)
        self.assertTrue(err.startswith("Error: num_inputs must be between 1 and 1000"), err)
        self.assertFalse((self.tmpDir / "x.v").exists())

        ret, _, err = self._main("-c", str(self.tmpDir / "missing.txt"))
        self.assertEqual(ret, 1)
        self.assertIn("Could not open config file", err)

    def test_debugDir(self):
        dbgDir = self.tmpDir / "dbg"
        ret, _, _ = self._main("-o", str(self.tmpDir / "d.v"), "-m", "dbgTop", "--debug-dir", str(dbgDir))
        self.assertEqual(ret, 0)
        self.assertTrue((dbgDir / "dbgTop" / "01.netlist.dot").is_file())

    def test_unwritableOutput(self):
        ret, _, err = self._main("-o", str(self.tmpDir / "no" / "such" / "dir.v"))
        self.assertEqual(ret, 1)
        self.assertIn("Could not open output file", err)


if __name__ == '__main__':
    unittest.main()
