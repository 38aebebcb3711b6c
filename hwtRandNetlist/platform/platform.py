from io import StringIO
from pathlib import Path
import sys
from typing import Optional, Union, Set

from hwtRandNetlist.debugTracer import DebugTracer
from hwtRandNetlist.netlist.analysis.consistencyCheck import RandNetlistPassConsistencyCheck
from hwtRandNetlist.netlist.context import RandNetlistCtx
from hwtRandNetlist.platform.debugBundle import RandNetlistDebugBundle, DebugId
from hwtRandNetlist.platform.fileUtils import outputFileGetter


class RandNetlistPlatform():
    """
    A container of debug configuration and of the sequence of passes executed on a generated netlist.

    :ivar _debug: debug outputs configuration
    :ivar _logPassExec: if True execution of analysis passes is logged to stderr
    """

    def __init__(self, debugDir: Optional[Union[str, Path]]=None,
                 debugFilter: Optional[Set[DebugId]]=RandNetlistDebugBundle.DEFAULT,
                 logPassExec: bool=False):
        self._debug = RandNetlistDebugBundle(debugDir, debugFilter)
        self._logPassExec = logPassExec

    def getPassManagerDebugLogFile(self) -> Optional[StringIO]:
        if self._logPassExec:
            return sys.stderr
        return None

    def _getDebugTracer(self, scopeName: str, dbgId: DebugId):
        """
        :returns: tuple (DebugTracer, flag which tells if the trace stream should be closed by the user)
        """
        dbgDir = self._debug.dir
        if dbgDir is not None and self._debug.isActivated(dbgId):
            self._debug._prepareDir()
            traceFile, doCloseTrace = outputFileGetter(dbgDir, dbgId[1])(scopeName)
            dbgTracer = DebugTracer(traceFile)
        else:
            dbgTracer = DebugTracer(None)
            doCloseTrace = False
        return dbgTracer, doCloseTrace

    def runRandNetlistPasses(self, netlist: RandNetlistCtx):
        """
        Run checks and debug dumps on a finished netlist.
        """
        D = RandNetlistDebugBundle
        DBG = self._debug.runDebugIfEnabled
        DBG(RandNetlistPassConsistencyCheck, (netlist,))
        DBG(D.DBG_1_netlist, (netlist,))
        DBG(D.DBG_1_netlistTxt, (netlist,))
        DBG(D.DBG_1_dependencyDepth, (netlist,))
