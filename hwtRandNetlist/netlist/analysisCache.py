from collections import OrderedDict
from typing import Type, Union

from hwtRandNetlist.netlist.analysis.randNetlistAnalysisPass import RandNetlistAnalysisPass


class AnalysisCache():
    """
    A pass manager for analysis passes, results of passes are cached until they are invalidated
    """

    def __init__(self,):
        self._analysis_cache = OrderedDict()

    def invalidateAnalysis(self, analysis_cls: Type[RandNetlistAnalysisPass]):
        a = self._analysis_cache.pop(analysis_cls, None)
        if a is not None:
            a.invalidate(self)

    def getAnalysisIfAvailable(self, analysis_cls: Type[RandNetlistAnalysisPass]):
        return self._analysis_cache.get(analysis_cls, None)

    def _runAnalysisImpl(self, a: RandNetlistAnalysisPass):
        raise NotImplementedError()

    def getAnalysis(self, analysis_cls: Union[Type[RandNetlistAnalysisPass], RandNetlistAnalysisPass]):
        """
        :param analysis_cls: class of the pass or an instance of already configured pass
        :returns: the pass object after it was executed on this netlist
        """
        if isinstance(analysis_cls, RandNetlistAnalysisPass):
            a = analysis_cls
            key = analysis_cls.__class__
        else:
            a = None
            key = analysis_cls

        try:
            return self._analysis_cache[key]
        except KeyError:
            pass

        if a is None:
            a = analysis_cls()

        self._analysis_cache[key] = a
        self._runAnalysisImpl(a)
        return a
