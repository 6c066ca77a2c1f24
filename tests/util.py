import os
from collections import namedtuple
from typing import Optional, Tuple, List
from pyoverload.config import Config
from pyoverload.error.message import PositionMessage
from pyoverload.manager import Manager

MsgWithLine = namedtuple("MsgWithLine", ["lineno", "msg"])

SRC_DIR = os.path.join(os.path.dirname(__file__), "src")

MISSING_FUNCTIONS = (
    "A series of @overload-decorated functions should always be followed "
    "by an implementation that is not @overload-ed"
)
MISSING_METHODS = (
    "A series of @overload-decorated methods should always be followed "
    "by an implementation that is not @overload-ed"
)
INCOMPATIBLE_FUNCTION = (
    "Signature of this @overload-decorated function is not compatible "
    "with the implementation"
)
INCOMPATIBLE_METHOD = (
    "Signature of this @overload-decorated method is not compatible "
    "with the implementation"
)


def error_assert(name: str, precise: bool = True, suffix: str = ".py"):
    """Assert based on error annotation in the file

    @param name: dotted name of the file under tests/src.

    @param precise: True for precise match, and False for just a subset.
    """
    manager, path = get_manager_path({}, name, suffix=suffix)
    manager.check()

    true_msg_list = parse_file_error(path)
    msg_list: List[PositionMessage] = [
        msg for msg in manager.take_messages(path) if isinstance(msg, PositionMessage)
    ]

    if precise:
        for true_msg, test_msg in zip(true_msg_list, msg_list):
            assert test_msg.pos.lineno == true_msg.lineno
            assert test_msg.msg == true_msg.msg
        assert len(true_msg_list) == len(msg_list)
    else:
        true_msg_list = [(true_msg.lineno, true_msg.msg) for true_msg in true_msg_list]
        test_msg_list = [(test_msg.pos.lineno, test_msg.msg) for test_msg in msg_list]
        for true_msg in true_msg_list:
            assert true_msg in test_msg_list


def parse_file_error(file_path):
    with open(file_path) as f:
        lines = f.readlines()
    msg_list = []

    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if line.startswith("#"):
            continue
        index = line.find("# E ")
        if index != -1:
            msg = line[index + 4 :]
            msg_list.append(MsgWithLine(lineno, msg))
    return msg_list


def get_manager_path(
    config: dict, name: str, cwd: Optional[str] = None, suffix: str = ".py"
) -> Tuple["Manager", str]:
    if not cwd:
        # default root path for checked files is tests/src/
        cwd = SRC_DIR
    filepath = os.path.join(cwd, *(name.split("."))) + suffix
    config["cwd"] = cwd
    manager = Manager(Config(config))
    manager.add_check_file(filepath)
    return manager, filepath
