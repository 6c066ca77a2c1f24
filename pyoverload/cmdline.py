import argparse
import logging
import os
import sys
from typing import Dict, List, Optional, TextIO
from pygments import highlight
from pygments.formatters.terminal import TerminalFormatter
from pygments.lexers.python import PythonLexer
from pyoverload.config import Config
from pyoverload.error.errorbox import ErrorBox
from pyoverload.error.errorcode import MANAGER_TAG
from pyoverload.error.message import Message
from pyoverload.fsys import read_source, split_lines
from pyoverload.manager import Manager

logger = logging.getLogger(__name__)


def cmdline_parse(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        "pyoverload", description="check @overload groups of python modules"
    )
    parser.add_argument(
        "module", metavar="module", nargs="*", help="module path", type=str
    )
    parser.add_argument(
        "-p",
        "--package",
        action="append",
        metavar="package path",
        help="check every module under a package",
        type=str,
    )
    parser.add_argument(
        "--show-source", action="store_true", help="print the offending source line"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="don't highlight the printed source"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    parse_res = parser.parse_args(argv)
    return parse_res


class Reporter:
    def __init__(self, config: Config, out: TextIO) -> None:
        self.config = config
        self.out = out
        self.line_cache: Dict[str, List[str]] = {}
        self.lexer = PythonLexer()
        self.formatter = TerminalFormatter()

    def get_line(self, path: str, lineno: int) -> Optional[str]:
        if path not in self.line_cache:
            try:
                self.line_cache[path] = split_lines(read_source(path))
            except (OSError, SyntaxError, UnicodeDecodeError):
                self.line_cache[path] = []
        lines = self.line_cache[path]
        if 0 < lineno <= len(lines):
            return lines[lineno - 1]
        return None

    def show_source(self, path: str, msg: Message):
        pos = msg.get_position()
        if not pos:
            return
        line = self.get_line(path, pos.lineno)
        if line is None:
            return
        if self.config.no_color:
            print("    " + line, file=self.out)
        else:
            colored = highlight(line, self.lexer, self.formatter).rstrip("\n")
            print("    " + colored, file=self.out)

    def report(self, tag: str, msg_list: List[Message]):
        for msg in msg_list:
            if tag == MANAGER_TAG:
                print(str(msg), file=self.out)
                continue
            if msg.get_position():
                print(f"{tag}:{msg}", file=self.out)
            else:
                print(f"{tag}: {msg}", file=self.out)
            if self.config.show_source:
                self.show_source(tag, msg)


def cmdline_main(
    argv: Optional[List[str]] = None, out: TextIO = sys.stdout
) -> int:
    cmd_res = cmdline_parse(argv)
    config = Config(cmd_res)

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    modules = [os.path.realpath(path) for path in cmd_res.module]
    for package in cmd_res.package or []:
        package = os.path.realpath(package)
        if not os.path.isdir(package):
            print(f"{package} may not be a package.", file=out)
            return 2
        modules.append(package)

    if not modules and not config.manual_path:
        print("please enter module path or package path", file=out)
        return 2

    manager = Manager(config)
    cmdline_errbox = ErrorBox(MANAGER_TAG)
    for mod in dict.fromkeys(modules):  # remove duplicates, keep order
        add_result = manager.add_check_path(mod)
        add_result.dump_to_box(cmdline_errbox)

    manager.check()
    cmdline_errbox.release(manager)

    all_messages = manager.take_all_messages()
    reporter = Reporter(config, out)
    count = 0
    for tag in sorted(all_messages):
        msg_list = all_messages[tag]
        reporter.report(tag, msg_list)
        count += len(msg_list)
    logger.debug(f"{len(manager.targets)} module(s) checked, {count} message(s)")
    return 1 if count else 0


def main():
    sys.exit(cmdline_main())
