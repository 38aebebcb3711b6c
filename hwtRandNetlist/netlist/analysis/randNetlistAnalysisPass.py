

class RandNetlistAnalysisPass():
    """
    A base class for random netlist analysis classes
    """

    def runOnRandNetlist(self, netlist: "RandNetlistCtx"):
        "Perform the analysis on the netlist"
        log = netlist._dbgLogPassExec
        if log is not None:
            log.write(f"Running analysis: {self.__class__.__name__} on {netlist}\n")
        self.runOnRandNetlistImpl(netlist)

    def runOnRandNetlistImpl(self, netlist: "RandNetlistCtx"):
        raise NotImplementedError("Implement this in implementation of this abstract class", self)

    def invalidate(self, netlist: "RandNetlistCtx"):
        """
        Remove any modification outside of this class when this analysis is invalidated
        :note: to invalidate pass use RandNetlistCtx.invalidateAnalysis, this function is callback for mentioned function
        which should be used by the pass to implement additional actions
        """
        log = netlist._dbgLogPassExec
        if log is not None:
            log.write(f"Invalidating analysis: {self.__class__.__name__} on {netlist}\n")
