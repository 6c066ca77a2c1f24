import os
import inspect
from typing import List, Optional, Type

PATH_ENV = 'PYOVERLOAD_PATH'


class Config:
    def __init__(self, config):
        def get(attr: str, require_type: Optional[Type] = None):
            if require_type:
                assert inspect.isclass(require_type)
            if isinstance(config, dict):
                res = config.get(attr)
            else:
                res = getattr(config, attr, None)

            if res:
                if not require_type or isinstance(res, require_type):
                    return res
                else:
                    return None
            return None

        # cwd: current working direcotry, relative paths are resolved against it
        # default: return value of os.getcwd()
        self.cwd: str = get('cwd', str) or os.getcwd()

        # manual_path: files or directories checked besides those given on the
        # command line.
        # default: []
        self.manual_path: List[str] = list(get('manual_path', list) or [])
        env_path = os.getenv(PATH_ENV)
        if env_path:
            for path in env_path.split(os.pathsep):
                if path and path not in self.manual_path:
                    self.manual_path.append(path)

        # show_source: print the offending line after each message.
        # default: False
        self.show_source: bool = get('show_source', bool) or False

        # no_color: don't highlight the printed source.
        # default: False
        self.no_color: bool = get('no_color', bool) or False

        # verbose: log debug messages.
        # default: False
        self.verbose: bool = get('verbose', bool) or False
