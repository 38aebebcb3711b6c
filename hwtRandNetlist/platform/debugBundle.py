from pathlib import Path
from typing import Tuple, Type, Optional, Union, Set

from hwtRandNetlist.netlist.analysis.dependencyDepth import RandNetlistAnalysisPassDumpDependencyDepth
from hwtRandNetlist.netlist.translation.dumpNodesDot import RandNetlistAnalysisPassDumpNodesDot
from hwtRandNetlist.netlist.translation.dumpNodesTxt import RandNetlistAnalysisPassDumpNodesTxt
from hwtRandNetlist.platform.fileUtils import outputFileGetter

DebugId = Tuple[Optional[Type], Optional[str]]


class RandNetlistDebugBundle():
    """
    A set of enabled debug outputs and the directory where they are written.
    Each output is written to "<debugDir>/<netlist label>/<file name>".

    :note: if the number N in DBG_N_* is the same it means that these debug options are working with the same input
    """

    DBG_0_generatorTrace = (None, "00.generator.trace.txt")  # trace of decisions made by generator
    DBG_1_netlist = (RandNetlistAnalysisPassDumpNodesDot, "01.netlist.dot")  # generated netlist as a graph
    DBG_1_netlistTxt = (RandNetlistAnalysisPassDumpNodesTxt, "01.netlist.txt")  # same as DBG_1_netlist just in txt
    DBG_1_dependencyDepth = (RandNetlistAnalysisPassDumpDependencyDepth, "01.dependencyDepth.txt")  # labeled depth vs. real combinational depth

    ALL = None
    NONE = set()
    ALL_RELIABLE = {
        DBG_0_generatorTrace,
        DBG_1_netlist,
        DBG_1_netlistTxt,
        DBG_1_dependencyDepth,
    }
    DEFAULT = NONE

    def __init__(self, debugDir: Optional[Union[str, Path]], filter_: Optional[Set[DebugId]]):
        """
        :attention: if debugDir is None no debug option will be enabled
        """
        self.dir = None if debugDir is None else Path(debugDir)
        self.filter = filter_
        self.firstRun = True

    def isActivated(self, item: DebugId):
        return self.filter is None or item in self.filter

    def _prepareDir(self):
        if self.firstRun:
            if not self.dir.exists():
                self.dir.mkdir(parents=True)
            self.firstRun = False

    def runDebugIfEnabled(self, id_: Union[DebugId, Type], applyArgs: tuple,
                          clsOverride: Optional[Type]=None,
                          applyFnGetter=lambda p: p.runOnRandNetlist,
                          constructorArgs: tuple=(),
                          constructorKwargs: dict={}):
        """
        Run the debug pass if debug directory is specified and the debug id is activated.

        :param id_: debug id tuple (pass class, output file name) or a class of the pass which does not produce any file
        """
        debugDir = self.dir
        isDebugId = isinstance(id_, tuple)
        if debugDir is not None and (not isDebugId or self.isActivated(id_)):
            self._prepareDir()

            if not isDebugId:
                assert clsOverride is None
                cls = id_
            elif clsOverride is None:
                cls = id_[0]
            else:
                cls = clsOverride

            if not isDebugId:
                obj = cls(*constructorArgs, **constructorKwargs)
            else:
                _, fileNameSuffix = id_
                if fileNameSuffix is not None:
                    outStreamGetter = outputFileGetter(debugDir, fileNameSuffix)
                    obj = cls(outStreamGetter, *constructorArgs, **constructorKwargs)
                else:
                    obj = cls(*constructorArgs, **constructorKwargs)

            applyFn = applyFnGetter(obj)
            applyFn(*applyArgs)
