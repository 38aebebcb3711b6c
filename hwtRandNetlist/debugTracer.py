from io import StringIO
from types import FunctionType
from typing import Optional, Union


class DebugTracer():
    """
    A wrapper around output stream for messages about generator actions.
    Functionality similar to standard python module called logging, but the messages are structured
    by nested scopes and a scope label is printed only if something was logged in it.
    """
    INDENT = "  "

    def __init__(self, out: Optional[StringIO]):
        self._out = out
        self._scope = []
        self._labelPrinted = []
        self._curIndent = ""

    def isEnabled(self):
        return self._out is not None

    def scoped(self, nameOrObj: Union[str, FunctionType, type], obj: Optional[object]=None):
        """
        Used to mark scope in output, automatically handles indenting and does not print scope prompt
        if nothing was logged in this or nested scope.

        :param obj: optional object with _id attribute which id is printed in scope label
        """
        self._scope.append((nameOrObj, obj))
        self._labelPrinted.append(False)
        return self

    def _writeScopeLabel(self):
        out = self._out
        for i, ((nameOrObj, obj), printed) in enumerate(zip(self._scope, self._labelPrinted)):
            if printed:
                continue

            if isinstance(nameOrObj, str):
                objStr = nameOrObj
            elif isinstance(nameOrObj, (FunctionType, type)):  # :note: type is a base type of class objects
                objStr = getattr(nameOrObj, "__qualname__", nameOrObj.__name__)
            else:
                objStr = repr(nameOrObj)

            for _ in range(i):
                out.write(self.INDENT)

            out.write(objStr)
            if obj is not None:
                out.write(f"<{obj._id}>")
            out.write(":\n")
            self._labelPrinted[i] = True

    def __enter__(self):
        if self._out is not None:
            self._curIndent = self._curIndent + self.INDENT
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            if not self._labelPrinted[-1]:
                # print error into trace
                self.log(("raised", exc_type, exc_val))

        if self._out is not None:
            self._curIndent = self._curIndent[0:-len(self.INDENT)]
        self._scope.pop()
        self._labelPrinted.pop()

    def log(self, msg, formater=lambda x: x, ending="\n"):
        out = self._out
        if out is not None:
            _msg = formater(msg)
            if not isinstance(_msg, str):
                _msg = repr(_msg)
            if self._labelPrinted and not self._labelPrinted[-1]:
                self._writeScopeLabel()
            out.write(self._curIndent)
            out.write(_msg)
            out.write(ending)
