import os
import ast
import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence
from pyoverload.checker import check_module
from pyoverload.config import Config
from pyoverload.error.errorbox import ErrorBox
from pyoverload.error.errorcode import (
    MANAGER_TAG,
    FileNotFound,
    FileUnreadable,
    ModuleSyntaxError,
)
from pyoverload.error.message import Message
from pyoverload.fsys import FilePath, read_source, search_modules_under_package
from pyoverload.result import Result
from pyoverload.target import Stage, Target

logger = logging.getLogger(__name__)


class Manager:
    def __init__(self, config: Config):
        self.config = config

        self.targets: Dict[str, Target] = {}
        self.q_check: Deque[Target] = deque()

        self.manager_errbox = ErrorBox(MANAGER_TAG)
        self.message_cache: Dict[str, List[Message]] = {}

        for path in config.manual_path:
            self.add_check_path(path).dump_to_box(self.manager_errbox)

    def abspath(self, path: FilePath) -> FilePath:
        return os.path.normpath(os.path.join(self.config.cwd, path))

    def get_target(self, tag: str) -> Optional[Target]:
        return self.targets.get(tag, None)

    def __add_target(self, target: Target):
        self.targets[target.tag] = target
        self.update_stage(target, target.stage, True)

    def __parse(self, target: Target) -> bool:
        assert target.stage == Stage.Parse
        try:
            if target.source is None:
                assert target.path
                target.source = read_source(target.path)
            target.ast = ast.parse(target.source, filename=target.path or target.tag)
            return True
        except SyntaxError as e:
            logger.debug(f"{target.tag} has a syntax error: {e}")
            target.errbox.add_err(ModuleSyntaxError(target.tag, e))
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"failed to read {target.tag}: {e}")
            target.errbox.add_err(FileUnreadable(target.tag, e))
        return False

    def update_stage(self, target: Target, stage: Stage, isnew: bool = False):
        """Update the stage of a target

        @param isnew: True if target is not in self.q_check.

        If target's original stage is equal to the new stage and isnew is false,
        then nothing will happen.
        """
        if target.stage == stage and not isnew:
            return
        target.stage = stage
        if stage == Stage.Parse:
            if self.__parse(target):
                self.update_stage(target, Stage.Check)
            else:
                target.stage = Stage.FINISH
        elif stage == Stage.Check:
            self.q_check.append(target)
        elif stage == Stage.FINISH:
            pass

    def add_check_file(self, path: FilePath, recheck: bool = False) -> Result[bool]:
        path = self.abspath(path)

        if not os.path.isfile(path):
            add_result = Result(False)
            add_result.add_err(FileNotFound(path))
            return add_result
        if path in self.targets:
            if recheck:
                return self.recheck(path)
            return Result(False)

        logger.debug(f"add {path}")
        self.__add_target(Target(path, ErrorBox(path), path))
        return Result(True)

    def add_check_source(
        self, tag: str, source: str, is_stub: bool = False
    ) -> Result[bool]:
        """Check source code that doesn't come from a file, tag names its messages"""
        if tag in self.targets:
            self.targets.pop(tag)
        target = Target(tag, ErrorBox(tag), None, source, is_stub)
        self.__add_target(target)
        return Result(True)

    def add_check_path(self, path: FilePath) -> Result[bool]:
        """Add a file or every source file under a directory"""
        path = self.abspath(path)
        if os.path.isdir(path):
            add_result = Result(True)
            for file in search_modules_under_package(path):
                file_result = self.add_check_file(file)
                if file_result.errors:
                    for err in file_result.errors:
                        add_result.add_err(err)
            return add_result
        return self.add_check_file(path)

    def check(self):
        while self.q_check:
            target = self.q_check.popleft()
            if target.stage != Stage.Check or target.ast is None:
                continue
            if self.targets.get(target.tag) is not target:
                # replaced by add_check_source
                continue
            logger.debug(f"check {target.tag}")
            check_module(target.ast, target.errbox, target.is_stub, target.source)
            self.update_stage(target, Stage.FINISH)

    def recheck(self, tag: str) -> Result[bool]:
        """Recheck a module read from disk, old messages of it are dropped"""
        target = self.targets.get(tag)
        assert target and target.path
        target.clear()
        target.source = None
        self.message_cache.pop(tag, None)
        self.update_stage(target, Stage.Parse, True)
        return Result(target.stage == Stage.Check)

    def send(self, tag: str, msg: Message):
        if tag in self.message_cache:
            self.message_cache[tag].append(msg)
        elif tag in self.targets or tag == MANAGER_TAG:
            self.message_cache[tag] = [msg]

    def take_messages_by_tag(self, tag: str) -> Sequence[Message]:
        """Get messages of a target, sorted by position"""
        target = self.targets.get(tag)
        if not target:
            return []
        target.errbox.release(self)
        if (res := self.message_cache.get(tag, None)):
            self.message_cache[tag] = []
            return sorted(res)
        else:
            return []

    def take_messages(self, path: FilePath) -> Sequence[Message]:
        """Get messages according to a file path"""
        return self.take_messages_by_tag(self.abspath(path))

    def take_all_messages(self) -> Dict[str, List[Message]]:
        self.manager_errbox.release(self)
        for target in self.targets.values():
            target.errbox.release(self)
        tmp_messages = {tag: sorted(msgs) for tag, msgs in self.message_cache.items() if msgs}
        self.message_cache = {}
        return tmp_messages
