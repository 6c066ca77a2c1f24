import os
import re
import tokenize
from typing import List

FilePath = str

STUB_SUFFIX = '.pyi'
SOURCE_SUFFIXES = ('.py', STUB_SUFFIX)
NEWLINE_RE = re.compile(r'\r\n|\r|\n')


def is_stub_path(path: FilePath) -> bool:
    """Stub files only declare signatures and are never checked"""
    return os.path.splitext(path)[1] == STUB_SUFFIX


def is_source_path(path: FilePath) -> bool:
    return os.path.splitext(path)[1] in SOURCE_SUFFIXES


def search_modules_under_package(path: FilePath) -> List[FilePath]:
    """Find every python source and stub file below path, sorted"""
    result = []
    for root, dirs, files in os.walk(path):
        dirs[:] = sorted(d for d in dirs if not d.startswith('.'))
        for file in sorted(files):
            if is_source_path(file):
                result.append(os.path.join(root, file))
    return result


def read_source(path: FilePath) -> str:
    """Read a source file honoring its encoding declaration"""
    with tokenize.open(path) as f:
        return f.read()


def split_lines(source: str) -> List[str]:
    """Split source into lines numbered the way ast numbers them.

    Unlike str.splitlines, form feeds and other separators inside a line are
    kept.
    """
    return NEWLINE_RE.split(source)
