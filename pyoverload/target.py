import ast
from enum import IntEnum
from typing import Optional
from pyoverload.error.errorbox import ErrorBox
from pyoverload.fsys import FilePath, is_stub_path


class Stage(IntEnum):
    """Number ascends as the analysis going deeper"""

    Parse = 1
    Check = 2
    FINISH = 3


class Target:
    """One module to check.

    tag identifies the target's messages, it is the path for files read from
    disk.
    """

    def __init__(
        self,
        tag: str,
        errbox: ErrorBox,
        path: Optional[FilePath] = None,
        source: Optional[str] = None,
        is_stub: Optional[bool] = None,
        stage: Stage = Stage.Parse,
    ):
        self.tag = tag
        self.errbox = errbox
        self.path = path
        self.source = source
        self.ast: Optional[ast.Module] = None
        self.stage = stage
        if is_stub is None:
            is_stub = bool(path) and is_stub_path(path)
        self.is_stub = is_stub

    def clear(self):
        self.ast = None
        self.errbox.clear()
        self.stage = Stage.Parse
